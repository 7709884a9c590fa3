from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, field_validator


class FrontMatter(BaseModel):
    """Metadata decoded from the YAML block at the top of a post's index file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    date: AwareDatetime
    description: str | None = None
    image: str | None = None

    @field_validator("title")
    @classmethod
    def _title_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _date_must_carry_time(cls, v: Any) -> Any:
        # YAML turns `2023-01-01` into a date, which has no offset to order by.
        if isinstance(v, date) and not isinstance(v, datetime):
            raise ValueError("must be a timestamp with an explicit UTC offset, not a bare date")
        # Numbers would otherwise be read as Unix timestamps in UTC.
        if not isinstance(v, (str, datetime)):
            raise ValueError("must be an ISO-8601 timestamp string with an explicit UTC offset")
        if isinstance(v, str) and v.strip().lstrip("+-").replace(".", "", 1).isdigit():
            raise ValueError("must be an ISO-8601 timestamp, not a Unix timestamp")
        return v

    @field_validator("description", "image")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        s = v.strip()
        return s if s else None


@dataclass(frozen=True)
class Post:
    """A fully assembled blog post, keyed by the directory it was read from."""

    title: str
    date: datetime
    description: str | None
    html: str
    path: str
    image: str | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "description": self.description,
            "html": self.html,
            "path": self.path,
            "image": self.image,
        }
