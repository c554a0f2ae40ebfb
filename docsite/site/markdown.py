"""Minimal Markdown → HTML renderer for lesson pages."""

from __future__ import annotations

import re
from collections.abc import Callable

_ORDERED_ITEM_RE = re.compile(r"^\d+[.)]\s+")
_FENCE_RE = re.compile(r"^(```|~~~)\s*([\w#+.-]*)")
_UNSAFE_SCHEMES = ("javascript:", "data:", "vbscript:")


def markdown_to_html(md: str) -> str:
    """Render a CommonMark-ish subset of Markdown to HTML.

    Output is deterministic and escape-by-default; lesson pages need readable
    code samples and headings, not full CommonMark conformance.
    """
    md = md.replace("\r\n", "\n").replace("\r", "\n")
    lines = md.split("\n")

    out: list[str] = []
    used_ids: dict[str, int] = {}
    para_buf: list[str] = []

    def flush_paragraph() -> None:
        text = " ".join(s.strip() for s in para_buf if s.strip())
        if text:
            out.append(f"<p>{_inline(text)}</p>")
        para_buf.clear()

    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        fence = _FENCE_RE.match(stripped)
        if fence:
            flush_paragraph()
            marker, lang = fence.group(1), fence.group(2)
            code_buf: list[str] = []
            i += 1
            while i < len(lines) and not lines[i].strip().startswith(marker):
                code_buf.append(lines[i])
                i += 1
            i += 1  # closing fence (or EOF)
            out.append(_code_block("\n".join(code_buf), lang))
            continue

        if stripped in ("---", "***", "___"):
            flush_paragraph()
            out.append("<hr>")
            i += 1
            continue

        if _looks_like_table_start(lines, i):
            flush_paragraph()
            table_lines: list[str] = []
            while i < len(lines) and lines[i].strip().startswith("|"):
                table_lines.append(lines[i])
                i += 1
            out.append(_table_to_html(table_lines))
            continue

        if stripped.startswith("#"):
            level = len(stripped) - len(stripped.lstrip("#"))
            if level <= 6 and (len(stripped) == level or stripped[level] == " "):
                flush_paragraph()
                text = stripped[level:].strip().rstrip("#").strip()
                anchor = _unique_id(_slugify(text), used_ids)
                out.append(f'<h{level} id="{anchor}">{_inline(text)}</h{level}>')
                i += 1
                continue

        if stripped.startswith(("- ", "* ", "+ ")):
            flush_paragraph()
            out.append("<ul>")
            while i < len(lines):
                s = lines[i].strip()
                if not s.startswith(("- ", "* ", "+ ")):
                    break
                out.append(f"<li>{_inline(s[2:].strip())}</li>")
                i += 1
            out.append("</ul>")
            continue

        if _ORDERED_ITEM_RE.match(stripped):
            flush_paragraph()
            out.append("<ol>")
            while i < len(lines):
                s = lines[i].strip()
                m = _ORDERED_ITEM_RE.match(s)
                if not m:
                    break
                out.append(f"<li>{_inline(s[m.end():])}</li>")
                i += 1
            out.append("</ol>")
            continue

        if stripped.startswith(">"):
            flush_paragraph()
            quoted: list[str] = []
            while i < len(lines) and lines[i].lstrip().startswith(">"):
                quoted.append(lines[i].lstrip()[1:])
                i += 1
            inner = markdown_to_html("\n".join(quoted))
            out.append(f"<blockquote>\n{inner}\n</blockquote>")
            continue

        if not stripped:
            flush_paragraph()
            i += 1
            continue

        para_buf.append(line)
        i += 1

    flush_paragraph()
    return "\n".join(out)


def _code_block(code: str, lang: str) -> str:
    cls = f' class="language-{_escape_attr(lang.lower())}"' if lang else ""
    return f"<pre><code{cls}>{_escape_block(code)}</code></pre>"


def _escape_block(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(text: str) -> str:
    return _escape_block(text).replace('"', "&quot;")


def _inline(text: str) -> str:
    # Placeholder-based inline renderer (escape-by-default).
    replacements: list[str] = []

    def stash(html: str) -> str:
        replacements.append(html)
        return f"\x00{len(replacements) - 1}\x00"

    text = _sub(r"`([^`]+)`", text, lambda m: stash(f"<code>{_escape_block(m.group(1))}</code>"))

    def _image_repl(match: re.Match[str]) -> str:
        src = safe_href(match.group(2))
        if not src:
            return stash(_escape_block(match.group(1)))
        return stash(f'<img src="{_escape_attr(src)}" alt="{_escape_attr(match.group(1))}">')

    text = _sub(r"!\[([^\]]*)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)", text, _image_repl)

    def _link_repl(match: re.Match[str]) -> str:
        href = safe_href(match.group(2))
        label = _escape_block(match.group(1))
        if not href:
            return stash(label)
        return stash(f'<a href="{_escape_attr(href)}">{label}</a>')

    text = _sub(r"\[([^\]]+)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)", text, _link_repl)
    text = _sub(
        r"\*\*([^*]+)\*\*",
        text,
        lambda m: stash(f"<strong>{_escape_block(m.group(1))}</strong>"),
    )
    text = _sub(
        r"(?<![\w*])\*([^*\s][^*]*)\*(?![\w*])",
        text,
        lambda m: stash(f"<em>{_escape_block(m.group(1))}</em>"),
    )

    escaped = _escape_block(text)
    # Later stashes may wrap earlier placeholders (links around code).
    for idx in range(len(replacements) - 1, -1, -1):
        escaped = escaped.replace(f"\x00{idx}\x00", replacements[idx])
    return escaped


def safe_href(href: str | None) -> str | None:
    if href is None:
        return None
    cleaned = href.strip()
    if not cleaned:
        return None
    if cleaned.lower().startswith(_UNSAFE_SCHEMES):
        return None
    return cleaned


def _sub(pattern: str, text: str, fn: Callable[[re.Match[str]], str]) -> str:
    return re.sub(pattern, fn, text, flags=re.DOTALL)


def _slugify(text: str) -> str:
    text = re.sub(r"[`*_\[\]()]", "", text.lower())
    slug = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return slug or "section"


def _unique_id(slug: str, used: dict[str, int]) -> str:
    count = used.get(slug, 0)
    used[slug] = count + 1
    return slug if count == 0 else f"{slug}-{count}"


def _looks_like_table_start(lines: list[str], i: int) -> bool:
    if i + 1 >= len(lines):
        return False
    header = lines[i].strip()
    sep = lines[i + 1].strip()
    if not header.startswith("|") or not sep.startswith("|"):
        return False
    return "---" in sep


def _table_to_html(table_lines: list[str]) -> str:
    rows = [[p.strip() for p in line.strip().strip("|").split("|")] for line in table_lines]
    header, body_rows = rows[0], rows[2:]

    out = ["<table>", "<thead>", "<tr>"]
    out.extend(f"<th>{_inline(h)}</th>" for h in header)
    out.extend(["</tr>", "</thead>", "<tbody>"])
    for r in body_rows:
        out.append("<tr>")
        out.extend(f"<td>{_inline(c)}</td>" for c in r)
        out.append("</tr>")
    out.extend(["</tbody>", "</table>"])
    return "\n".join(out)
