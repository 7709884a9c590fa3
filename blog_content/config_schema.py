from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PositiveInt = Annotated[int, Field(ge=1)]

MarkdownExtension = Literal["table", "strikethrough"]
ErrorPolicy = Literal["abort", "collect", "exclude"]


def _normalize_extension_list(values: list[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for item in values:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


class ContentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = "content/blog"
    index_filename: str = "index.md"
    encoding: str = "utf-8"

    @field_validator("root")
    @classmethod
    def _root_must_be_set(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("must be a non-empty path")
        return value

    @field_validator("index_filename")
    @classmethod
    def _index_filename_must_be_plain(cls, v: str) -> str:
        name = (v or "").strip()
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError("must be a plain file name")
        return name


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_workers: PositiveInt = 4
    on_error: ErrorPolicy = "abort"


class RenderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    extensions: list[MarkdownExtension] = Field(default_factory=list)

    @field_validator("extensions")
    @classmethod
    def _dedupe_extensions(cls, v: list[str]) -> list[str]:
        return _normalize_extension_list(v)


class ImagesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    scan_body: bool = True


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    content: ContentConfig = Field(default_factory=ContentConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
