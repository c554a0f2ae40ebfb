"""Static site generator for lesson documentation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..config import (
    DOCSEARCH_API_KEY,
    DOCSEARCH_INDEX_NAME,
    INLINED_CSS_ID,
    SITE_TITLE,
    STYLES_FILENAME,
    BuildMode,
    build_mode_from_env,
)
from ..content.lessons import Lesson, load_lessons
from .markdown import markdown_to_html
from .styles import write_styles
from .templates import (
    LessonRow,
    docsearch_init_script,
    lesson_index,
    lesson_nav,
    lesson_page,
    meta_tags,
    para,
    render_html,
    site_header,
    stylesheet_link,
    title_tag,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Other"


def build_site(content_dir: Path, out_dir: Path, mode: BuildMode | None = None) -> dict[str, Any]:
    """Build a static HTML site from a directory of lesson markdown files."""
    if mode is None:
        mode = build_mode_from_env()
    content_dir = content_dir.resolve()
    out_dir = out_dir.resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    styles_path = write_styles(out_dir, STYLES_FILENAME)
    lessons, warnings = load_lessons(content_dir)
    logger.info("Building %d lessons from %s (%s)", len(lessons), content_dir, mode.value)

    post_body = _post_body_components()
    pages = 0
    inlined_css = False

    for idx, lesson in enumerate(lessons):
        prev = _row(lessons[idx - 1], "../") if idx > 0 else None
        next_ = _row(lessons[idx + 1], "../") if idx + 1 < len(lessons) else None
        body = "\n".join(
            [
                site_header("../index.html", SITE_TITLE),
                lesson_page(
                    title=lesson.meta.title,
                    meta_line=_meta_line(lesson),
                    tags=lesson.meta.tags,
                    cover=lesson.meta.cover,
                    html=markdown_to_html(lesson.body),
                ),
                lesson_nav(prev, next_),
            ]
        )
        head = _head_components(
            title=f"{lesson.meta.title} · {SITE_TITLE}",
            mode=mode,
            css_href=f"../{STYLES_FILENAME}",
            description=lesson.meta.description,
            image=lesson.meta.cover,
        )
        html = render_html(head, body, post_body, mode=mode, styles_path=styles_path)
        inlined_css = inlined_css or f'id="{INLINED_CSS_ID}"' in html

        page_dir = out_dir / lesson.slug
        page_dir.mkdir(parents=True, exist_ok=True)
        (page_dir / "index.html").write_text(html, encoding="utf-8")
        pages += 1

    # Root index
    if lessons:
        index_body = lesson_index(SITE_TITLE, _group_by_category(lessons))
    else:
        index_body = "\n".join([lesson_index(SITE_TITLE, []), para("No lessons found.")])
    head = _head_components(title=SITE_TITLE, mode=mode, css_href=STYLES_FILENAME)
    html = render_html(
        head,
        "\n".join([site_header("index.html", SITE_TITLE), index_body]),
        post_body,
        mode=mode,
        styles_path=styles_path,
    )
    inlined_css = inlined_css or f'id="{INLINED_CSS_ID}"' in html
    (out_dir / "index.html").write_text(html, encoding="utf-8")
    pages += 1

    return {
        "lessons": len(lessons),
        "pages": pages,
        "mode": mode.value,
        "out_dir": str(out_dir),
        "inlined_css": inlined_css,
        "warnings": warnings,
        "total_bytes": _dir_size_bytes(out_dir),
    }


def _head_components(
    title: str,
    mode: BuildMode,
    css_href: str,
    description: str | None = None,
    image: str | None = None,
) -> str:
    parts = [title_tag(title)]
    meta = meta_tags(description=description, image=image)
    if meta:
        parts.append(meta)
    # Production pages carry the stylesheet inline instead.
    if mode != BuildMode.PRODUCTION:
        parts.append(stylesheet_link(css_href))
    return "\n".join(parts)


def _post_body_components() -> str:
    if DOCSEARCH_API_KEY and DOCSEARCH_INDEX_NAME:
        return docsearch_init_script(DOCSEARCH_API_KEY, DOCSEARCH_INDEX_NAME)
    return ""


def _row(lesson: Lesson, prefix: str) -> LessonRow:
    return LessonRow(
        title=lesson.meta.title,
        href=f"{prefix}{lesson.slug}/index.html",
        label=_ordinal_label(lesson),
    )


def _ordinal_label(lesson: Lesson) -> str | None:
    meta = lesson.meta
    if meta.chapter is not None and meta.lesson is not None:
        return f"{meta.chapter}.{meta.lesson}"
    if meta.lesson is not None:
        return str(meta.lesson)
    if meta.chapter is not None:
        return str(meta.chapter)
    return None


def _meta_line(lesson: Lesson) -> str | None:
    parts = []
    label = _ordinal_label(lesson)
    if label:
        parts.append(f"Lesson {label}")
    if lesson.meta.category:
        parts.append(lesson.meta.category)
    if lesson.meta.date:
        parts.append(lesson.meta.date)
    return " · ".join(parts) or None


def _group_by_category(lessons: list[Lesson]) -> list[tuple[str, list[LessonRow]]]:
    # Categories appear in order of their first lesson.
    groups: dict[str, list[LessonRow]] = {}
    for lesson in lessons:
        category = lesson.meta.category or UNCATEGORIZED
        groups.setdefault(category, []).append(_row(lesson, ""))
    return list(groups.items())


def _dir_size_bytes(path: Path) -> int:
    total = 0
    for p in path.rglob("*"):
        if p.is_file():
            total += p.stat().st_size
    return total
