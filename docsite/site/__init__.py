"""HTML document shell, markdown rendering and site building."""

from .build import build_site
from .markdown import markdown_to_html
from .styles import load_inlined_styles
from .templates import html_doc, render_html

__all__ = [
    "build_site",
    "markdown_to_html",
    "load_inlined_styles",
    "html_doc",
    "render_html",
]
