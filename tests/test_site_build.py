"""Tests for the static site generator."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from docsite.config import DOCSEARCH_JS_URL, INLINED_CSS_ID, BuildMode
from docsite.site.build import build_site
from docsite.site.styles import CSS

STYLE_TAG = f'<style id="{INLINED_CSS_ID}">'


def _write_lessons(root: Path) -> None:
    root.mkdir(parents=True, exist_ok=True)
    (root / "intro.md").write_text(
        "---\n"
        'title: "Getting Started"\n'
        "lesson: 1\n"
        "chapter: 1\n"
        'cover: "https://img.test/cover.png"\n'
        'date: "01/05/2018"\n'
        'category: "akkatecture"\n'
        'type: "lesson"\n'
        "tags:\n"
        "  - walkthrough\n"
        "---\n\n"
        "# Getting Started\n\n"
        "```csharp\nvar system = ActorSystem.Create(\"bank\");\n```\n",
        encoding="utf-8",
    )
    (root / "commands.md").write_text(
        "---\ntitle: Commands\nlesson: 2\nchapter: 1\ncategory: akkatecture\n---\n\nSend a *command*.\n",
        encoding="utf-8",
    )
    (root / "faq.md").write_text("---\ntitle: FAQ\n---\n\nQuestions.\n", encoding="utf-8")
    (root / "broken.md").write_text("---\nlesson: 9\n---\n", encoding="utf-8")


class TestSiteBuild(unittest.TestCase):
    def test_build_site_writes_index_and_lesson_pages(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td) / "content"
            out = Path(td) / "public"
            _write_lessons(content)

            report = build_site(content, out, mode=BuildMode.DEVELOPMENT)

            self.assertEqual(report["lessons"], 3)
            self.assertEqual(report["pages"], 4)
            self.assertEqual(report["mode"], "development")
            self.assertFalse(report["inlined_css"])
            self.assertEqual(len(report["warnings"]), 1)

            self.assertTrue((out / "styles.css").exists())
            index = (out / "index.html").read_text(encoding="utf-8")
            intro = (out / "intro" / "index.html").read_text(encoding="utf-8")
            commands = (out / "commands" / "index.html").read_text(encoding="utf-8")
            self.assertTrue((out / "faq" / "index.html").exists())
            self.assertFalse((out / "broken").exists())

        self.assertIn('href="intro/index.html"', index)
        self.assertIn("<h2>akkatecture</h2>", index)
        self.assertIn("<h2>Other</h2>", index)
        self.assertLess(index.index("Getting Started"), index.index("Commands"))

        self.assertIn("<title>Getting Started · ", intro)
        self.assertIn('<link rel="stylesheet" href="../styles.css">', intro)
        self.assertIn('class="language-csharp"', intro)
        self.assertIn('content="https://img.test/cover.png"', intro)
        self.assertIn('href="../commands/index.html"', intro)
        self.assertNotIn(STYLE_TAG, intro)
        self.assertEqual(intro.count(DOCSEARCH_JS_URL), 1)

        self.assertIn("<em>command</em>", commands)
        self.assertIn('href="../intro/index.html"', commands)

    def test_production_build_inlines_written_stylesheet(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td) / "content"
            out = Path(td) / "public"
            _write_lessons(content)

            report = build_site(content, out, mode=BuildMode.PRODUCTION)
            intro = (out / "intro" / "index.html").read_text(encoding="utf-8")

        self.assertTrue(report["inlined_css"])
        self.assertEqual(intro.count(STYLE_TAG), 1)
        self.assertIn(CSS.lstrip(), intro)
        self.assertNotIn('href="../styles.css"', intro)

    def test_production_build_survives_unreadable_stylesheet(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td) / "content"
            out = Path(td) / "public"
            _write_lessons(content)

            with patch("docsite.site.build.write_styles", return_value=Path(td) / "gone.css"):
                with self.assertLogs("docsite.site.styles", level="ERROR"):
                    report = build_site(content, out, mode=BuildMode.PRODUCTION)
            index = (out / "index.html").read_text(encoding="utf-8")

        self.assertFalse(report["inlined_css"])
        self.assertEqual(report["pages"], 4)
        self.assertNotIn(STYLE_TAG, index)

    def test_docsearch_init_script_when_configured(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td) / "content"
            out = Path(td) / "public"
            _write_lessons(content)

            with patch("docsite.site.build.DOCSEARCH_API_KEY", "abc"), patch(
                "docsite.site.build.DOCSEARCH_INDEX_NAME", "akkatecture"
            ):
                build_site(content, out, mode=BuildMode.DEVELOPMENT)
            index = (out / "index.html").read_text(encoding="utf-8")

        self.assertIn('docsearch({"apiKey": "abc"', index)
        self.assertLess(index.index("docsearch({"), index.index("</body>"))
        self.assertGreater(index.index("docsearch({"), index.index("<body>"))

    def test_empty_content_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "public"
            report = build_site(Path(td) / "missing", out, mode=BuildMode.DEVELOPMENT)
            index = (out / "index.html").read_text(encoding="utf-8")

        self.assertEqual(report["lessons"], 0)
        self.assertEqual(report["pages"], 1)
        self.assertIn("No lessons found.", index)


if __name__ == "__main__":
    unittest.main()
