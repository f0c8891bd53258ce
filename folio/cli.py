"""folio.cli

Command line interface entry point for folio.

Design constraints:
- argparse-based.
- Lazy imports: do not import heavy dependencies at parse time.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio.core.config import Config

EPILOG = "Newest first."


@dataclass(frozen=True)
class CliContext:
    repo_root: Path


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def _add_source_args(p: argparse.ArgumentParser, *, destination: bool = False) -> None:
    p.add_argument("--source", default="site", help="Site source directory (default: site).")
    if destination:
        p.add_argument("--destination", default=None, help="Output directory (default: from config).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Static blog builder: posts in, pages out.",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )

    sub = parser.add_subparsers(dest="command")

    p_build = sub.add_parser("build", help="Render the site into the destination directory")
    _add_source_args(p_build, destination=True)

    p_index = sub.add_parser("index", help="Print the post index, newest first")
    _add_source_args(p_index)
    p_index.add_argument("--json", action="store_true", help="Emit canonical JSON.")

    p_new = sub.add_parser("new", help="Create a new post")
    _add_source_args(p_new)
    p_new.add_argument("title", help="Post title.")
    p_new.add_argument("--date", default=None, help="Publication date, YYYY-MM-DD (default: today, UTC).")
    p_new.add_argument("--tags", default="", help="Comma-separated tags.")
    p_new.add_argument("--layout", default="post")

    p_serve = sub.add_parser("serve", help="Build, then start the preview server")
    _add_source_args(p_serve, destination=True)
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--no-build", action="store_true", help="Serve the existing output as-is.")

    p_status = sub.add_parser("status", help="Print site status")
    _add_source_args(p_status, destination=True)

    return parser


def _print_version() -> None:
    from folio import __version__

    print(f"folio v{__version__}")


def _load_config(ctx: CliContext, args: argparse.Namespace) -> Config:
    from folio.core.config import Config
    from folio.core.log import configure_logging

    source = Path(args.source)
    if not source.is_absolute():
        source = ctx.repo_root / source

    config = Config.for_site(source, repo_root=ctx.repo_root)
    dest = getattr(args, "destination", None)
    if dest:
        dest_path = Path(dest)
        if not dest_path.is_absolute():
            dest_path = ctx.repo_root / dest_path
        config = config.model_copy(update={"destination_dir": dest_path})

    configure_logging(config.logging)
    return config


def _cmd_build(ctx: CliContext, args: argparse.Namespace) -> int:
    from folio.build import build_site

    config = _load_config(ctx, args)
    result = build_site(config)
    print(
        f"built {result.posts} posts, {result.pages} pages, {result.static_files} static files "
        f"into {config.destination_dir} ({result.duration_ms} ms)"
    )
    return 0


def _cmd_index(ctx: CliContext, args: argparse.Namespace) -> int:
    from folio.content.loader import load_site
    from folio.render.index import format_index_json, format_index_text, render_index

    config = _load_config(ctx, args)
    entries = render_index(load_site(config).posts)
    if args.json:
        print(format_index_json(entries))
    else:
        sys.stdout.write(format_index_text(entries))
    return 0


def _cmd_new(ctx: CliContext, args: argparse.Namespace) -> int:
    import yaml

    from folio.core.time import utc_now
    from folio.render.templates import slugify

    config = _load_config(ctx, args)

    if args.date:
        try:
            day = date.fromisoformat(args.date)
        except ValueError:
            print(f"error: --date must be YYYY-MM-DD, got {args.date!r}", file=sys.stderr)
            return 2
    else:
        day = utc_now().date()

    slug = slugify(args.title)
    if not slug:
        print("error: title must contain at least one letter or digit", file=sys.stderr)
        return 2

    path = config.posts_path / f"{day.isoformat()}-{slug}.md"
    if path.exists():
        print(f"error: post already exists: {path}", file=sys.stderr)
        return 1

    meta: dict[str, object] = {"layout": args.layout, "title": args.title}
    tags = [t.strip() for t in args.tags.split(",") if t.strip()]
    if tags:
        meta["tags"] = tags

    path.parent.mkdir(parents=True, exist_ok=True)
    front = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
    path.write_text(f"---\n{front}---\n\n", encoding="utf-8")
    print(path)
    return 0


def _cmd_serve(ctx: CliContext, args: argparse.Namespace) -> int:
    from folio.build import build_site
    from folio.preview import create_app

    config = _load_config(ctx, args)
    if not args.no_build:
        build_site(config)

    host = args.host or config.preview.host
    port = args.port or config.preview.port

    import uvicorn

    uvicorn.run(create_app(config), host=host, port=port, log_level=config.logging.level.lower())
    return 0


def _cmd_status(ctx: CliContext, args: argparse.Namespace) -> int:
    from folio.content.loader import load_site

    config = _load_config(ctx, args)
    collection = load_site(config)

    site_cfg = config.source_dir / "_config.yml"
    dest = config.destination_dir
    dest_status = "present" if dest.is_dir() else "missing"

    print("folio status")
    print(f"- source: {config.source_dir}")
    print(f"- config: {site_cfg if site_cfg.exists() else 'defaults'}")
    print(f"- posts: {len(collection.posts)}")
    print(f"- pages: {len(collection.pages)}")
    print(f"- static files: {len(collection.static_files)}")
    print(f"- destination: {dest} ({dest_status})")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(repo_root=_repo_root_from_cwd())

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "build": _cmd_build,
        "index": _cmd_index,
        "new": _cmd_new,
        "serve": _cmd_serve,
        "status": _cmd_status,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    from folio.core.exceptions import FolioError

    try:
        return int(fn(ctx, args))
    except FolioError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
