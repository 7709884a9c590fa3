from __future__ import annotations

from typing import Any, Mapping, Sequence

from .errors import (
    ContentFileUnreadable,
    FrontMatterMalformed,
    FrontMatterMissing,
    PostFailure,
    PostNotFound,
    RenderFailure,
)

_RECOMMENDATIONS: tuple[tuple[type[BaseException], str], ...] = (
    (PostNotFound, "Remove stale links to deleted posts, or restore the post directory."),
    (
        ContentFileUnreadable,
        "Make sure every post directory contains a readable index file "
        "(content.index_filename) in the configured encoding.",
    ),
    (FrontMatterMissing, "Start each index file with a '---' line and close the metadata block with another '---' line."),
    (
        FrontMatterMalformed,
        "Front matter needs a non-empty title and a date with a UTC offset, "
        "e.g. date: 2023-01-01T00:00:00+00:00.",
    ),
    (RenderFailure, "Check the Markdown body for constructs the renderer cannot handle."),
)


def _recommendations_for(failures: Sequence[PostFailure]) -> list[str]:
    out: list[str] = []
    for exc_type, text in _RECOMMENDATIONS:
        if any(type(f.error) is exc_type for f in failures) and text not in out:
            out.append(text)
    return out


def build_failure_report(failures: Sequence[PostFailure], *, total: int) -> dict[str, Any]:
    """
    Summarize per-post build failures.

    `total` counts every post that was attempted, successful or not.
    """
    failed = len(failures)
    built = max(0, int(total) - failed)

    if failed == 0:
        status = "ok"
        summary = f"All {built} posts built."
    elif built == 0:
        status = "failed"
        summary = f"No posts built; {failed} of {total} failed."
    else:
        status = "partial"
        summary = f"{built} of {total} posts built; {failed} failed."

    details: dict[str, Any] = {
        "total": int(total),
        "built": built,
        "failed": failed,
        "failures": [
            {
                "path": f.path,
                "error_type": type(f.error).__name__,
                "message": str(f.error),
            }
            for f in failures
        ],
    }

    return {
        "status": status,
        "summary": summary,
        "details": details,
        "recommendations": _recommendations_for(failures),
    }


def format_failure_report(report: Mapping[str, Any]) -> str:
    status = str(report.get("status") or "").strip() or "unknown"
    summary = str(report.get("summary") or "").strip() or f"Build finished ({status})."

    lines: list[str] = [summary]

    details = report.get("details")
    items = details.get("failures") if isinstance(details, Mapping) else None
    if isinstance(items, list) and items:
        lines.append("Failures:")
        for item in items:
            if not isinstance(item, Mapping):
                continue
            message = str(item.get("message") or "").strip().replace("\n", "\n    ")
            lines.append(f"- {item.get('path')}: {item.get('error_type')}: {message}")

    recs = report.get("recommendations")
    if isinstance(recs, list) and recs:
        lines.append("Recommendations:")
        for r in recs:
            t = str(r or "").strip()
            if t:
                lines.append(f"- {t}")

    return "\n".join(lines)
