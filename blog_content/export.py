from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .collection import PostCollection
from .errors import ExportError
from .post import Post


def _dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def _write_text(path: Path, text: str) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e


def index_payload(collection: PostCollection) -> dict[str, Any]:
    posts = [p.to_json_dict() for p in collection]
    return {"posts": posts, "total": len(posts)}


def post_payload(post: Post) -> dict[str, Any]:
    return post.to_json_dict()


def _remove_stale_posts(posts_dir: Path, keep: set[str]) -> None:
    for entry in posts_dir.glob("*.json"):
        if entry.stem in keep:
            continue
        try:
            entry.unlink()
        except OSError as e:
            raise ExportError(f"Failed to remove stale post file {entry}: {e}") from e


def export_site_state(collection: PostCollection, out_dir: str | Path) -> Path:
    """
    Write the build state consumed by the page layer.

    Produces `index.json` with the ordered post list and `posts/<path>.json`
    for every post. Post files left by an earlier build whose post is no
    longer in the collection are removed. Returns the output directory.
    """
    out = Path(out_dir)
    posts_dir = out / "posts"
    try:
        posts_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Failed to create output directory {posts_dir}: {e}") from e

    _write_text(out / "index.json", _dumps(index_payload(collection)))
    for post in collection:
        _write_text(posts_dir / f"{post.path}.json", _dumps(post_payload(post)))
    _remove_stale_posts(posts_dir, set(collection.paths()))

    return out
