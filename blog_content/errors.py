from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class ContentError(RuntimeError):
    """Base class for failures while ingesting blog content."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ContentRootUnreadable(ContentError):
    """Raised when the content root cannot be listed."""


class EntryMetadataUnavailable(ContentError):
    """Raised when the type of an entry under the content root cannot be read."""


class ContentFileUnreadable(ContentError):
    """Raised when a post's content file is missing or cannot be read."""


class PostNotFound(ContentFileUnreadable):
    """Raised when an identifier does not name a post directory."""


class FrontMatterMissing(ContentError):
    """Raised when a document has no delimited front matter block."""


class FrontMatterMalformed(ContentError):
    """Raised when the front matter block does not decode into the expected shape."""


class RenderFailure(ContentError):
    """Raised when Markdown to HTML conversion fails."""


@dataclass(frozen=True)
class PostFailure:
    path: str
    error: ContentError


class BuildFailed(ContentError):
    """Raised when one or more posts fail to assemble under the collect policy."""

    def __init__(self, failures: Sequence[PostFailure]) -> None:
        self.failures = tuple(failures)
        count = len(self.failures)
        noun = "post" if count == 1 else "posts"
        lines = [f"{count} {noun} failed to build:"]
        for f in self.failures:
            lines.append(f"- {f.path}: {type(f.error).__name__}: {f.error}")
        super().__init__("\n".join(lines))


class ExportError(RuntimeError):
    """Raised when writing exported build state fails."""
