"""Tests for the command-line interface."""

from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from docsite.cli import main
from docsite.config import INLINED_CSS_ID


class TestCli(unittest.TestCase):
    def test_render_production_inlines_styles(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "head.html").write_text("<title>Docs</title>", encoding="utf-8")
            (root / "body.html").write_text("<main>hello</main>", encoding="utf-8")
            (root / "styles.css").write_text("main{padding:0}", encoding="utf-8")

            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(
                    [
                        "render",
                        "--head", str(root / "head.html"),
                        "--body", str(root / "body.html"),
                        "--mode", "production",
                        "--styles", str(root / "styles.css"),
                    ]
                )

        self.assertEqual(code, 0)
        out = buf.getvalue()
        self.assertIn("<title>Docs</title>", out)
        self.assertIn("<main>hello</main>", out)
        self.assertIn(f'<style id="{INLINED_CSS_ID}">main{{padding:0}}</style>', out)

    def test_render_with_no_fragments(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["render", "--mode", "development"])
        self.assertEqual(code, 0)
        self.assertIn("<body>", buf.getvalue())

    def test_render_missing_fragment_file(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["render", "--body", "/no/such/body.html"])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err.getvalue())

    def test_render_undecodable_fragment_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            body = Path(td) / "body.html"
            body.write_bytes(b"\xff\xfe<p>")
            err = io.StringIO()
            with redirect_stderr(err):
                code = main(["render", "--body", str(body)])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err.getvalue())

    def test_build_and_list_lessons(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td) / "content"
            content.mkdir()
            (content / "one.md").write_text("---\ntitle: One\nlesson: 1\n---\nHi\n", encoding="utf-8")

            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["build", "--content", str(content), "--out", str(Path(td) / "public")])
            self.assertEqual(code, 0)
            self.assertIn("Lessons: 1", buf.getvalue())
            self.assertTrue((Path(td) / "public" / "one" / "index.html").exists())

            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["lessons", "--content", str(content)])
        self.assertEqual(code, 0)
        self.assertIn("One", buf.getvalue())

    def test_requires_subcommand(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
