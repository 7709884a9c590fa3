from __future__ import annotations

from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from .config_schema import RenderConfig
from .errors import RenderFailure
from .front_matter import normalize_newlines


class MarkdownRenderer:
    """
    CommonMark renderer for whole post documents.

    The front matter block is recognized and dropped by the parser, so the full
    file text can be passed in. Raw HTML in the source is emitted unescaped:
    post content is written by the site owner and is trusted.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        cfg = config or RenderConfig()

        md = MarkdownIt("commonmark", {"html": True})
        md.use(front_matter_plugin)
        for rule in cfg.extensions:
            md.enable(rule)

        self._md = md
        self._extensions = tuple(cfg.extensions)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def render(self, text: str, *, path: str | None = None) -> str:
        try:
            return self._md.render(normalize_newlines(text))
        except Exception as e:  # markdown-it rules can raise arbitrary errors
            raise RenderFailure(f"Failed to render Markdown: {e}", path=path) from e


_default_renderer: MarkdownRenderer | None = None


def render_markdown(text: str, *, path: str | None = None) -> str:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = MarkdownRenderer()
    return _default_renderer.render(text, path=path)
