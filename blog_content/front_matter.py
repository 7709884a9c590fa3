from __future__ import annotations

from typing import Any

import yaml
from pydantic import ValidationError

from .config import format_validation_errors
from .errors import FrontMatterMalformed, FrontMatterMissing
from .post import FrontMatter

MARKER = "---"


def normalize_newlines(text: str) -> str:
    s = text or ""
    if s.startswith("\ufeff"):
        s = s[1:]
    return s.replace("\r\n", "\n").replace("\r", "\n")


def _is_marker(line: str) -> bool:
    return line.rstrip() == MARKER


def split_front_matter(text: str, *, path: str | None = None) -> tuple[str, str]:
    """
    Split a document into its front matter block and the body that follows.

    The first line must be a `---` marker; the block runs until the next marker
    line. Raises FrontMatterMissing when either marker is absent.
    """
    lines = normalize_newlines(text).split("\n")

    if not lines or not _is_marker(lines[0]):
        raise FrontMatterMissing("Document does not start with a '---' front matter marker", path=path)

    for i in range(1, len(lines)):
        if _is_marker(lines[i]):
            block = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1 :])
            return block, body

    raise FrontMatterMissing("Front matter block is not closed by a '---' marker", path=path)


def _load_block(block: str, *, path: str | None) -> dict[str, Any]:
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontMatterMalformed(f"Front matter is not valid YAML: {e}", path=path) from e

    if not isinstance(data, dict):
        raise FrontMatterMalformed("Front matter must be a YAML mapping", path=path)

    return data


def parse_front_matter(text: str, *, path: str | None = None) -> FrontMatter:
    """
    Decode the front matter of a document into a FrontMatter.

    Only the metadata is returned; the caller renders the whole document, and
    the Markdown renderer skips the block itself.
    """
    block, _ = split_front_matter(text, path=path)
    data = _load_block(block, path=path)

    try:
        return FrontMatter.model_validate(data)
    except ValidationError as e:
        raise FrontMatterMalformed(
            format_validation_errors(e, header="Invalid front matter:"),
            path=path,
        ) from e
