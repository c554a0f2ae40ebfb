"""Site stylesheet and the build-time CSS read used for inlining."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import BuildMode

logger = logging.getLogger(__name__)

CSS = r"""
:root {
  --bg: #ffffff;
  --fg: #1f2328;
  --muted: #656d76;
  --border: #d8dee4;
  --accent: #c0392b;
  --code-bg: #f6f8fa;
  --sans: -apple-system, "Segoe UI", "Helvetica Neue", Arial, sans-serif;
  --mono: ui-monospace, "SF Mono", "Consolas", "Liberation Mono", monospace;
  --page-max: 860px;
}

html, body { height: 100%; }

body {
  font-family: var(--sans);
  font-size: 16px;
  line-height: 1.65;
  margin: 0;
  background: var(--bg);
  color: var(--fg);
  -webkit-font-smoothing: antialiased;
}

#___docsite { max-width: var(--page-max); margin: 0 auto; padding: 2rem 1.5rem 3rem; }

a { color: var(--accent); text-decoration: none; }
a:hover { text-decoration: underline; }

header.site {
  display: flex;
  justify-content: space-between;
  align-items: center;
  border-bottom: 1px solid var(--border);
  padding-bottom: 0.75rem;
  margin-bottom: 2rem;
  gap: 1rem;
}

header.site .brand { font-weight: 700; color: var(--fg); }

#search {
  font: inherit;
  font-size: 14px;
  padding: 0.3rem 0.6rem;
  border: 1px solid var(--border);
  min-width: 14rem;
}

h1 { font-size: 2rem; line-height: 1.25; margin: 0 0 0.5rem 0; }
h2 { font-size: 1.4rem; margin: 2rem 0 0.75rem 0; border-bottom: 1px solid var(--border); }
h3 { font-size: 1.15rem; margin: 1.5rem 0 0.5rem 0; }

.muted { color: var(--muted); font-size: 14px; }
.tags span { margin-right: 0.5rem; }
.cover { display: block; max-width: 100%; margin: 1rem 0 1.5rem 0; }

ul, ol { padding-left: 1.5rem; }
li { margin: 0.25rem 0; }
ul.lessons { list-style: none; padding-left: 0; }
ul.lessons li { margin: 0.5rem 0; }

table { border-collapse: collapse; width: 100%; margin: 1rem 0; }
th, td { border: 1px solid var(--border); padding: 0.4rem 0.6rem; vertical-align: top; }
th { text-align: left; background: var(--code-bg); }

pre {
  overflow-x: auto;
  margin: 1rem 0;
  padding: 0.75rem 1rem;
  background: var(--code-bg);
  border: 1px solid var(--border);
}

code { font-family: var(--mono); font-size: 0.9em; }
p code, li code, td code { background: var(--code-bg); padding: 0.1rem 0.3rem; }

blockquote {
  margin: 1rem 0;
  padding: 0 1rem;
  border-left: 3px solid var(--accent);
  color: var(--muted);
}

hr { border: none; border-top: 1px solid var(--border); margin: 2rem 0; }

nav.lesson-nav {
  display: flex;
  justify-content: space-between;
  border-top: 1px solid var(--border);
  margin-top: 3rem;
  padding-top: 1rem;
}

@media (max-width: 700px) {
  #___docsite { padding: 1.25rem 1rem 2rem; }
  header.site { flex-direction: column; align-items: flex-start; }
  #search { min-width: 0; width: 100%; }
}
"""


def write_styles(out_dir: Path, filename: str) -> Path:
    """Write the site stylesheet into the output directory."""
    path = out_dir / filename
    path.write_text(CSS.lstrip(), encoding="utf-8")
    return path


def load_inlined_styles(mode: BuildMode, styles_path: Path) -> str | None:
    """Read the stylesheet to inline into the document shell.

    Returns None outside production mode, and also when the file cannot be
    read; the failure is logged and the page renders without inlined CSS.
    """
    if mode != BuildMode.PRODUCTION:
        return None
    try:
        return styles_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read stylesheet for inlining (%s): %s", styles_path, e)
        return None
