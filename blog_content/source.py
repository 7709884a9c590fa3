from __future__ import annotations

from pathlib import Path

from .assemble import assemble_post
from .collection import BuildResult, PostCollection, build_collection
from .config_schema import AppConfig
from .discover import list_post_identifiers
from .post import Post
from .render import MarkdownRenderer
from .run_log import BuildLogger


class ContentSource:
    """
    What the page layer sees of the content pipeline.

    The index page uses list_posts(); per-post pages are enumerated with
    list_post_identifiers() and filled with get_post(). Every call reads the
    content root again, so a new build always reflects the files on disk.
    """

    def __init__(
        self,
        root: str | Path,
        *,
        config: AppConfig | None = None,
        logger: BuildLogger | None = None,
    ) -> None:
        self._root = Path(root)
        self._config = config or AppConfig()
        self._logger = logger
        self._renderer = MarkdownRenderer(self._config.render)

    @classmethod
    def from_config(cls, config: AppConfig, *, logger: BuildLogger | None = None) -> "ContentSource":
        return cls(config.content.root, config=config, logger=logger)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> AppConfig:
        return self._config

    def build(self) -> BuildResult:
        return build_collection(self._root, config=self._config, logger=self._logger)

    def list_posts(self) -> PostCollection:
        return self.build().collection

    def list_post_identifiers(self) -> list[str]:
        return list_post_identifiers(self._root)

    def get_post(self, identifier: str) -> Post:
        return assemble_post(self._root, identifier, config=self._config, renderer=self._renderer)
