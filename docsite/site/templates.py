"""HTML document shell and page fragments for the static site generator."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from html import escape
from pathlib import Path

from ..config import (
    BODY_ROOT_ID,
    DOCSEARCH_CSS_URL,
    DOCSEARCH_INPUT_SELECTOR,
    DOCSEARCH_JS_URL,
    FAVICON_URL,
    INLINED_CSS_ID,
    PUBLIC_DIR,
    STYLES_FILENAME,
    BuildMode,
    build_mode_from_env,
)
from .markdown import safe_href
from .styles import load_inlined_styles


def html_doc(
    head_components: str,
    body: str,
    post_body_components: str,
    inlined_css: str | None = None,
) -> str:
    """Render the outer HTML document.

    The three fragments are pre-rendered markup and are inserted as-is.
    The inlined ``<style>`` element is emitted only when ``inlined_css`` is
    not None.
    """
    css = f'<style id="{INLINED_CSS_ID}">{inlined_css}</style>\n' if inlined_css is not None else ""
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"{head_components}\n"
        f'<link rel="shortcut icon" type="image/png" href="{escape(FAVICON_URL, quote=True)}">\n'
        f'<link rel="stylesheet" href="{escape(DOCSEARCH_CSS_URL, quote=True)}">\n'
        f'<script type="text/javascript" src="{escape(DOCSEARCH_JS_URL, quote=True)}"></script>\n'
        f"{css}"
        "</head>\n"
        "<body>\n"
        f'<div id="{BODY_ROOT_ID}">{body}</div>\n'
        f"{post_body_components}\n"
        "</body>\n"
        "</html>\n"
    )


def render_html(
    head_components: str,
    body: str,
    post_body_components: str,
    mode: BuildMode | None = None,
    styles_path: Path | None = None,
) -> str:
    """Render a page shell, inlining the stylesheet in production mode."""
    if mode is None:
        mode = build_mode_from_env()
    if styles_path is None:
        styles_path = PUBLIC_DIR / STYLES_FILENAME
    inlined_css = load_inlined_styles(mode, styles_path)
    return html_doc(head_components, body, post_body_components, inlined_css=inlined_css)


# Head fragments


def title_tag(title: str) -> str:
    return f"<title>{escape(title)}</title>"


def meta_tags(description: str | None = None, image: str | None = None) -> str:
    lines = []
    if description:
        lines.append(f'<meta name="description" content="{escape(description, quote=True)}">')
    image = safe_href(image)
    if image:
        lines.append(f'<meta property="og:image" content="{escape(image, quote=True)}">')
    return "\n".join(lines)


def stylesheet_link(href: str) -> str:
    return f'<link rel="stylesheet" href="{escape(href, quote=True)}">'


def docsearch_init_script(api_key: str, index_name: str, selector: str = DOCSEARCH_INPUT_SELECTOR) -> str:
    options = {"apiKey": api_key, "indexName": index_name, "inputSelector": selector}
    # json.dumps does not escape "</", which would end the script element early
    payload = json.dumps(options, sort_keys=True).replace("</", "<\\/")
    return f'<script type="text/javascript">docsearch({payload});</script>'


# Body fragments


def link(href: str, text: str) -> str:
    return f'<a href="{escape(href, quote=True)}">{escape(text)}</a>'


def h1(text: str) -> str:
    return f"<h1>{escape(text)}</h1>"


def h2(text: str) -> str:
    return f"<h2>{escape(text)}</h2>"


def para(text: str) -> str:
    return f"<p>{escape(text)}</p>"


def site_header(home_href: str, site_title: str) -> str:
    return (
        '<header class="site">'
        f'<a class="brand" href="{escape(home_href, quote=True)}">{escape(site_title)}</a>'
        '<input id="search" type="search" placeholder="Search the docs" aria-label="Search">'
        "</header>"
    )


@dataclass(frozen=True)
class LessonRow:
    title: str
    href: str
    label: str | None = None


def lesson_index(site_title: str, groups: Iterable[tuple[str, list[LessonRow]]]) -> str:
    """Items: (category, rows) in display order."""
    lines = [h1(site_title)]
    for category, rows in groups:
        lines.append(h2(category))
        lines.append('<ul class="lessons">')
        for r in rows:
            label = f'<span class="muted">{escape(r.label)}</span> ' if r.label else ""
            lines.append(f"<li>{label}{link(r.href, r.title)}</li>")
        lines.append("</ul>")
    return "\n".join(lines)


def lesson_nav(prev: LessonRow | None, next_: LessonRow | None) -> str:
    left = link(prev.href, f"← {prev.title}") if prev else "<span></span>"
    right = link(next_.href, f"{next_.title} →") if next_ else "<span></span>"
    return f'<nav class="lesson-nav">{left}{right}</nav>'


def lesson_page(
    title: str,
    meta_line: str | None,
    tags: list[str],
    cover: str | None,
    html: str,
) -> str:
    lines = ["<article>", h1(title)]
    if meta_line:
        lines.append(f'<div class="muted">{escape(meta_line)}</div>')
    if tags:
        spans = "".join(f"<span>#{escape(t)}</span>" for t in tags)
        lines.append(f'<div class="muted tags">{spans}</div>')
    cover = safe_href(cover)
    if cover:
        lines.append(f'<img class="cover" src="{escape(cover, quote=True)}" alt="">')
    lines.append(html)
    lines.append("</article>")
    return "\n".join(lines)
