from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, overload

from .assemble import assemble_post
from .config_schema import AppConfig
from .discover import list_post_identifiers
from .errors import BuildFailed, ContentError, PostFailure
from .post import Post
from .render import MarkdownRenderer
from .run_log import BuildLogger


class PostCollection(Sequence[Post]):
    """
    Immutable, ordered set of posts with lookup by path.

    Paths must be unique; construction fails otherwise.
    """

    def __init__(self, posts: Iterable[Post] = ()) -> None:
        items = tuple(posts)
        by_path: dict[str, Post] = {}
        for post in items:
            if post.path in by_path:
                raise ValueError(f"Duplicate post path: {post.path!r}")
            by_path[post.path] = post
        self._posts = items
        self._by_path = by_path

    @classmethod
    def newest_first(cls, posts: Iterable[Post]) -> "PostCollection":
        # sorted() stays stable with reverse=True, so equal dates keep discovery order.
        return cls(sorted(posts, key=lambda p: p.date, reverse=True))

    def __len__(self) -> int:
        return len(self._posts)

    @overload
    def __getitem__(self, index: int) -> Post: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Post, ...]: ...

    def __getitem__(self, index: int | slice) -> Post | tuple[Post, ...]:
        return self._posts[index]

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __repr__(self) -> str:
        return f"PostCollection({list(self.paths())!r})"

    def paths(self) -> tuple[str, ...]:
        return tuple(p.path for p in self._posts)

    def get(self, path: str) -> Post | None:
        return self._by_path.get(path)


@dataclass(frozen=True)
class BuildResult:
    collection: PostCollection
    failures: tuple[PostFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.collection) + len(self.failures)


def _assemble_one(
    root: Path,
    identifier: str,
    *,
    config: AppConfig,
    renderer: MarkdownRenderer,
    logger: BuildLogger | None,
) -> Post:
    post = assemble_post(root, identifier, config=config, renderer=renderer)
    if logger is not None:
        logger.post_assembled(post)
    return post


def _iter_outcomes(
    root: Path,
    identifiers: list[str],
    *,
    config: AppConfig,
    renderer: MarkdownRenderer,
    logger: BuildLogger | None,
) -> Iterator[tuple[str, Post | ContentError]]:
    """
    Yield (identifier, post-or-error) in discovery order.

    With more than one worker, posts are assembled concurrently and results are
    collected in submission order. Closing the iterator cancels pending work.
    """
    workers = min(config.build.max_workers, len(identifiers))

    if workers <= 1:
        for ident in identifiers:
            try:
                yield ident, _assemble_one(root, ident, config=config, renderer=renderer, logger=logger)
            except ContentError as e:
                yield ident, e
        return

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="blog-content") as pool:
        futures = [
            (
                ident,
                pool.submit(
                    _assemble_one,
                    root,
                    ident,
                    config=config,
                    renderer=renderer,
                    logger=logger,
                ),
            )
            for ident in identifiers
        ]
        try:
            for ident, fut in futures:
                try:
                    yield ident, fut.result()
                except ContentError as e:
                    yield ident, e
        finally:
            for _, fut in futures:
                fut.cancel()


def build_collection(
    root: str | Path,
    *,
    config: AppConfig | None = None,
    logger: BuildLogger | None = None,
    identifiers: Iterable[str] | None = None,
) -> BuildResult:
    """
    Assemble every post under the content root and order them newest first.

    How per-post failures are handled depends on `build.on_error`:
    - abort: the first failure in discovery order is raised.
    - collect: all failures are gathered and raised together as BuildFailed.
    - exclude: failing posts are dropped and reported in BuildResult.failures.
    """
    cfg = config or AppConfig()
    policy = cfg.build.on_error
    p = Path(root)

    ids = list(identifiers) if identifiers is not None else list_post_identifiers(p)

    renderer = MarkdownRenderer(cfg.render)

    if logger is not None:
        logger.info(
            "collection_started",
            root=str(p),
            identifiers=len(ids),
            policy=policy,
            max_workers=cfg.build.max_workers,
            extensions=list(renderer.extensions),
        )

    posts: list[Post] = []
    failures: list[PostFailure] = []

    outcomes = _iter_outcomes(p, ids, config=cfg, renderer=renderer, logger=logger)
    with closing(outcomes):
        for ident, outcome in outcomes:
            if isinstance(outcome, Post):
                posts.append(outcome)
                continue

            failure = PostFailure(path=ident, error=outcome)
            if logger is not None:
                logger.post_failed(failure, policy=policy)

            if policy == "abort":
                raise outcome

            failures.append(failure)

    if failures and policy == "collect":
        raise BuildFailed(failures)

    collection = PostCollection.newest_first(posts)

    if logger is not None:
        logger.info(
            "collection_built",
            posts=len(collection),
            failures=len(failures),
            paths=list(collection.paths()),
        )

    return BuildResult(collection=collection, failures=tuple(failures))


def list_posts(
    root: str | Path,
    *,
    config: AppConfig | None = None,
    logger: BuildLogger | None = None,
) -> PostCollection:
    return build_collection(root, config=config, logger=logger).collection


def get_post(
    root: str | Path,
    identifier: str,
    *,
    config: AppConfig | None = None,
) -> Post:
    """Assemble a single post directly, without building the whole collection."""
    return assemble_post(root, identifier, config=config)
