"""CLI entry point for docsite."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import PUBLIC_DIR, STYLES_FILENAME, BuildMode

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="docsite",
        description="Build a static documentation site from markdown lessons.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"docsite {__version__}",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd", required=True)
    modes = [m.value for m in BuildMode]

    p_build = sub.add_parser("build", help="Build the site from lesson files")
    p_build.add_argument("--content", "-c", type=Path, default=Path("./content"), help="Lesson directory")
    p_build.add_argument("--out", "-o", type=Path, default=PUBLIC_DIR, help="Site output directory")
    p_build.add_argument("--mode", "-m", choices=modes, help="Build mode (default: from DOCSITE_ENV/NODE_ENV)")

    p_render = sub.add_parser("render", help="Render one document shell to stdout")
    p_render.add_argument("--head", type=Path, help="File with pre-rendered head markup")
    p_render.add_argument("--body", type=Path, help="File with pre-rendered body markup")
    p_render.add_argument("--post-body", type=Path, help="File with pre-rendered post-body markup")
    p_render.add_argument("--mode", "-m", choices=modes, help="Build mode (default: from DOCSITE_ENV/NODE_ENV)")
    p_render.add_argument(
        "--styles",
        type=Path,
        default=PUBLIC_DIR / STYLES_FILENAME,
        help="Stylesheet to inline in production mode",
    )

    p_lessons = sub.add_parser("lessons", help="List lessons in site order")
    p_lessons.add_argument("--content", "-c", type=Path, default=Path("./content"), help="Lesson directory")

    args = parser.parse_args(argv)
    _setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "build":
        return _cmd_build(args)
    if args.cmd == "render":
        return _cmd_render(args)
    if args.cmd == "lessons":
        return _cmd_lessons(args)

    parser.print_help()
    return 2


def _setup_logging(level: int) -> None:
    log = logging.getLogger("docsite")
    log.setLevel(level)
    if log.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    log.addHandler(handler)


def _mode(value: str | None) -> BuildMode | None:
    return BuildMode(value) if value else None


def _cmd_build(args: Any) -> int:
    from .site.build import build_site

    try:
        report = build_site(args.content, args.out, mode=_mode(args.mode))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("✓ Site generated")
    print(f"  Output: {report.get('out_dir')}")
    print(f"  Mode: {report.get('mode')}")
    print(f"  Lessons: {report.get('lessons')}")
    print(f"  Pages: {report.get('pages')}")
    print(f"  Inlined CSS: {'yes' if report.get('inlined_css') else 'no'}")
    total_bytes = int(report.get("total_bytes") or 0)
    print(f"  Size: {total_bytes / 1024:.1f} KB")

    warnings = report.get("warnings") or []
    if warnings:
        print(f"\nWarnings ({len(warnings)}):")
        for w in warnings[:10]:
            print(f"  - {w}")
        if len(warnings) > 10:
            print(f"  ... and {len(warnings) - 10} more")
    return 0


def _cmd_render(args: Any) -> int:
    from .site.templates import render_html

    try:
        head = _read_fragment(args.head)
        body = _read_fragment(args.body)
        post_body = _read_fragment(args.post_body)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render_html(head, body, post_body, mode=_mode(args.mode), styles_path=args.styles))
    return 0


def _read_fragment(path: Path | None) -> str:
    if path is None:
        return ""
    return path.read_text(encoding="utf-8")


def _cmd_lessons(args: Any) -> int:
    from .content.lessons import load_lessons

    lessons, warnings = load_lessons(args.content)
    for w in warnings:
        print(f"Warning: {w}", file=sys.stderr)

    if not lessons:
        print("No lessons found")
        return 0

    for lesson in lessons:
        chapter = "" if lesson.meta.chapter is None else str(lesson.meta.chapter)
        number = "" if lesson.meta.lesson is None else str(lesson.meta.lesson)
        print(f"  {chapter:>3} {number:>3}  {lesson.slug:32} {lesson.meta.title}")
    return 0


if __name__ == "__main__":
    app()
