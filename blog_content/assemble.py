from __future__ import annotations

import os
import stat
from pathlib import Path

from .config_schema import AppConfig
from .errors import ContentFileUnreadable, PostNotFound
from .front_matter import parse_front_matter
from .images import resolve_image
from .post import Post
from .render import MarkdownRenderer


def _is_plain_segment(identifier: str) -> bool:
    if not identifier or identifier in (".", ".."):
        return False
    return "/" not in identifier and "\\" not in identifier and "\x00" not in identifier


def _is_real_dir(path: Path) -> bool:
    # Symlinks are not posts, matching list_post_identifiers.
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return False


def post_source_path(root: str | Path, identifier: str, *, index_filename: str = "index.md") -> Path:
    """
    Resolve the index file for a post identifier.

    Raises PostNotFound when the identifier is not a single path segment or has
    no directory under the root.
    """
    if not _is_plain_segment(identifier):
        raise PostNotFound(f"Invalid post identifier: {identifier!r}", path=identifier)

    post_dir = Path(root) / identifier
    if not _is_real_dir(post_dir):
        raise PostNotFound(f"No post directory for {identifier!r} under {root}", path=identifier)

    return post_dir / index_filename


def read_post_source(path: Path, *, identifier: str, encoding: str = "utf-8") -> str:
    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise ContentFileUnreadable(f"Content file not found: {path}", path=identifier) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ContentFileUnreadable(f"Failed to read content file {path}: {e}", path=identifier) from e


def assemble_post(
    root: str | Path,
    identifier: str,
    *,
    config: AppConfig | None = None,
    renderer: MarkdownRenderer | None = None,
) -> Post:
    """
    Build the Post for one content directory.

    The whole file, front matter included, goes to the renderer; the parser
    only contributes the metadata. Errors from every stage propagate.
    """
    cfg = config or AppConfig()
    md = renderer or MarkdownRenderer(cfg.render)

    source = post_source_path(root, identifier, index_filename=cfg.content.index_filename)
    text = read_post_source(source, identifier=identifier, encoding=cfg.content.encoding)

    front_matter = parse_front_matter(text, path=identifier)
    html = md.render(text, path=identifier)
    image = resolve_image(front_matter.image, html, scan_body=cfg.images.scan_body)

    return Post(
        title=front_matter.title,
        date=front_matter.date,
        description=front_matter.description,
        html=html,
        path=identifier,
        image=image,
    )
