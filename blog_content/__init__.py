from __future__ import annotations

from .assemble import assemble_post
from .collection import BuildResult, PostCollection, build_collection, get_post, list_posts
from .config import config_sha256, load_config
from .config_schema import AppConfig
from .discover import list_post_identifiers
from .errors import (
    BuildFailed,
    ConfigError,
    ContentError,
    ContentFileUnreadable,
    ContentRootUnreadable,
    EntryMetadataUnavailable,
    ExportError,
    FrontMatterMalformed,
    FrontMatterMissing,
    PostFailure,
    PostNotFound,
    RenderFailure,
)
from .front_matter import parse_front_matter
from .images import resolve_image
from .post import FrontMatter, Post
from .render import MarkdownRenderer, render_markdown
from .source import ContentSource

__all__ = [
    "AppConfig",
    "BuildFailed",
    "BuildResult",
    "ConfigError",
    "ContentError",
    "ContentFileUnreadable",
    "ContentRootUnreadable",
    "ContentSource",
    "EntryMetadataUnavailable",
    "ExportError",
    "FrontMatter",
    "FrontMatterMalformed",
    "FrontMatterMissing",
    "MarkdownRenderer",
    "Post",
    "PostCollection",
    "PostFailure",
    "PostNotFound",
    "RenderFailure",
    "assemble_post",
    "build_collection",
    "config_sha256",
    "get_post",
    "list_post_identifiers",
    "list_posts",
    "load_config",
    "parse_front_matter",
    "render_markdown",
    "resolve_image",
]
