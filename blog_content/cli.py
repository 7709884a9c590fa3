from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from .collection import BuildResult
from .config import config_sha256, load_config, with_content_root
from .config_schema import AppConfig
from .errors import BuildFailed, ConfigError, ContentError, ExportError
from .export import export_site_state
from .failure_report import build_failure_report, format_failure_report
from .run_log import BuildLogger
from .source import ContentSource


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file (defaults are used when omitted).",
    )
    p.add_argument(
        "--content",
        default=None,
        help="Content root directory; overrides content.root from the config.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blog_content")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ls = subparsers.add_parser("list", help="List post identifiers under the content root.")
    _add_common_args(ls)
    ls.set_defaults(_handler=_cmd_list)

    show = subparsers.add_parser("show", help="Assemble one post and print it as JSON.")
    show.add_argument("identifier", help="Post directory name.")
    _add_common_args(show)
    show.set_defaults(_handler=_cmd_show)

    check = subparsers.add_parser(
        "check",
        help="Assemble every post and report all content defects.",
    )
    _add_common_args(check)
    check.set_defaults(_handler=_cmd_check)

    build = subparsers.add_parser(
        "build",
        help="Build the post collection and export it as JSON build state.",
    )
    _add_common_args(build)
    build.add_argument(
        "--out",
        required=True,
        help="Output directory for JSON state and the build log.",
    )
    build.set_defaults(_handler=_cmd_build)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _load(args: argparse.Namespace) -> AppConfig:
    cfg = load_config(args.config)
    return with_content_root(cfg, args.content)


def _cmd_list(args: argparse.Namespace) -> int:
    source = ContentSource.from_config(_load(args))
    for ident in source.list_post_identifiers():
        print(ident)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    source = ContentSource.from_config(_load(args))
    post = source.get_post(args.identifier)
    print(json.dumps(post.to_json_dict(), indent=2, ensure_ascii=False, sort_keys=True))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    cfg = _load(args)
    build_cfg = cfg.build.model_copy(update={"on_error": "collect"})
    source = ContentSource.from_config(cfg.model_copy(update={"build": build_cfg}))

    try:
        result = source.build()
        report = build_failure_report(result.failures, total=result.total)
    except BuildFailed as e:
        total = len(source.list_post_identifiers())
        report = build_failure_report(e.failures, total=total)

    print(format_failure_report(report))
    return 0 if report["status"] == "ok" else 3


def _print_result(result: BuildResult, out_dir: Path, log_path: Path) -> None:
    print(f"posts={len(result.collection)}")
    print(f"failures={len(result.failures)}")
    for path in result.collection.paths():
        print(f"post={path}")
    print(f"out_dir={out_dir}")
    print(f"build_log={log_path}")


def _cmd_build(args: argparse.Namespace) -> int:
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    log_path = out_dir / "build.log"
    with BuildLogger.open(log_path) as log:
        log.info(
            "build_command_started",
            config_path=str(args.config) if args.config else None,
            content_root=str(args.content) if args.content else None,
            out_dir=str(out_dir),
        )

        try:
            cfg = _load(args)
            log.info(
                "config_loaded",
                content_root=cfg.content.root,
                on_error=cfg.build.on_error,
                max_workers=cfg.build.max_workers,
                config_sha256=config_sha256(cfg),
            )

            result = ContentSource.from_config(cfg, logger=log).build()

            log.info("export_started", path=str(out_dir))
            export_site_state(result.collection, out_dir)
            log.info("export_completed", path=str(out_dir), posts=len(result.collection))

            if result.failures:
                report = build_failure_report(result.failures, total=result.total)
                log.warning("build_partial", report=report)
                _eprint(format_failure_report(report))

            _print_result(result, out_dir, log_path)
            return 0 if result.ok else 4
        except Exception as e:
            log.exception("build_command_failed", exc=e)
            raise


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except (ContentError, ExportError) as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
