from __future__ import annotations

import os
from pathlib import Path

from .errors import ContentRootUnreadable, EntryMetadataUnavailable


def list_post_identifiers(root: str | Path) -> list[str]:
    """
    List the immediate subdirectories of the content root, one per post.

    Entries are returned in the filesystem's listing order. Files and symlinks
    are skipped; the walk does not recurse.
    """
    p = Path(root)

    try:
        with os.scandir(p) as it:
            entries = list(it)
    except OSError as e:
        raise ContentRootUnreadable(f"Cannot list content root {p}: {e}") from e

    out: list[str] = []
    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise EntryMetadataUnavailable(
                f"Cannot determine the type of {entry.path}: {e}",
                path=entry.name,
            ) from e
        if is_dir:
            out.append(entry.name)

    return out
