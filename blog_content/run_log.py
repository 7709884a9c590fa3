from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, TextIO

from .errors import PostFailure
from .post import Post

_MESSAGE_LIMIT = 2000
_TRACEBACK_LIMIT = 12000


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def describe_error(exc: BaseException) -> dict[str, Any]:
    """JSON-ready summary of an exception, with the post path when it has one."""
    info: dict[str, Any] = {
        "type": type(exc).__name__,
        "message": _clip(str(exc), _MESSAGE_LIMIT),
        "traceback": _clip(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            _TRACEBACK_LIMIT,
        ),
    }
    post_path = getattr(exc, "path", None)
    if post_path:
        info["post"] = post_path
    return info


class BuildLogger:
    """
    JSONL build log.

    Every line is a JSON object with `seq`, `ts`, `level`, `event` and
    `build_id`, plus `path` when the event concerns one post and `data` for
    anything else. `seq` follows write order, which is what to sort on when
    worker threads interleave. Each build truncates the file it is given.
    """

    def __init__(self, path: str | Path, *, build_id: str | None = None) -> None:
        self._path = Path(path)
        self._build_id = (build_id or "").strip() or uuid.uuid4().hex
        self._lock = Lock()
        self._seq = 0
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fp: TextIO | None = self._path.open("w", encoding="utf-8", newline="\n")

    @classmethod
    def open(cls, path: str | Path, *, build_id: str | None = None) -> "BuildLogger":
        return cls(path, build_id=build_id)

    @property
    def build_id(self) -> str:
        return self._build_id

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def __enter__(self) -> "BuildLogger":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def info(self, event: str, *, path: str | None = None, **data: Any) -> None:
        self.log("INFO", event, path=path, **data)

    def warning(self, event: str, *, path: str | None = None, **data: Any) -> None:
        self.log("WARN", event, path=path, **data)

    def exception(self, event: str, *, exc: BaseException, path: str | None = None, **data: Any) -> None:
        self.log("ERROR", event, path=path, error=describe_error(exc), **data)

    def post_assembled(self, post: Post) -> None:
        self.info(
            "post_assembled",
            path=post.path,
            title=post.title,
            date=post.date.isoformat(),
            image=post.image,
            html_chars=len(post.html),
        )

    def post_failed(self, failure: PostFailure, *, policy: str) -> None:
        self.exception("post_failed", exc=failure.error, path=failure.path, policy=policy)

    def log(self, level: str, event: str, *, path: str | None = None, **data: Any) -> None:
        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "event": event,
            "build_id": self._build_id,
        }
        if path:
            record["path"] = path
        if data:
            record["data"] = data

        with self._lock:
            if self._fp is None:
                raise ValueError(f"Build log {self._path} is closed")
            self._seq += 1
            record["seq"] = self._seq
            self._fp.write(json.dumps(record, ensure_ascii=False, sort_keys=True, default=str) + "\n")
            self._fp.flush()
