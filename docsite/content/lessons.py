"""Lesson markdown files and their YAML front matter."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^---[ \t]*$", re.MULTILINE)


class LessonError(ValueError):
    """Raised when a lesson file cannot be loaded."""


class LessonMeta(BaseModel):
    """Front matter of a lesson file."""

    title: str
    lesson: int | None = None
    chapter: int | None = None
    cover: str | None = None
    date: str | None = None
    category: str | None = None
    type: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, v: Any) -> Any:
        # YAML turns unquoted 2018-05-01 into a date object
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_to_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError("tags must be a string or a list")
        return [str(t) for t in v]


class Lesson(BaseModel):
    """A parsed lesson: metadata plus the markdown body."""

    meta: LessonMeta
    slug: str
    body: str
    source: Path

    @property
    def sort_key(self) -> tuple[int, int, str]:
        missing = 1 << 30
        chapter = self.meta.chapter if self.meta.chapter is not None else missing
        lesson = self.meta.lesson if self.meta.lesson is not None else missing
        return (chapter, lesson, self.slug)


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its front matter and body.

    Args:
        text: Raw file contents

    Returns:
        (front matter mapping, markdown body). Documents without a leading
        ``---`` block return an empty mapping and the text unchanged.
    """
    text = text.lstrip("\ufeff")
    first = _FENCE_RE.match(text)
    if first is None:
        return {}, text

    closing = _FENCE_RE.search(text, first.end())
    if closing is None:
        raise LessonError("Unterminated front matter block")

    raw = text[first.end() : closing.start()]
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise LessonError(f"Invalid front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LessonError("Front matter must be a mapping")

    body = text[closing.end() :].lstrip("\r\n")
    return data, body


def load_lesson(path: Path) -> Lesson:
    """Load and validate a single lesson file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LessonError(f"Cannot read {path}: {e}") from e

    try:
        data, body = parse_front_matter(text)
    except LessonError as e:
        raise LessonError(f"{path}: {e}") from e

    try:
        meta = LessonMeta.model_validate(data)
    except ValidationError as e:
        raise LessonError(f"Invalid front matter in {path}: {e}") from e

    return Lesson(meta=meta, slug=_slug_for(path), body=body, source=path)


def load_lessons(content_dir: Path) -> tuple[list[Lesson], list[str]]:
    """Load every lesson under a content directory, in site order.

    Files that fail to load are skipped; one warning is returned per file.
    """
    lessons: list[Lesson] = []
    warnings: list[str] = []
    if not content_dir.exists():
        return lessons, warnings

    seen: dict[str, Path] = {}
    for path in sorted(content_dir.rglob("*.md")):
        if not path.is_file():
            continue
        try:
            lesson = load_lesson(path)
        except LessonError as e:
            logger.warning("Skipping lesson %s: %s", path, e)
            warnings.append(str(e))
            continue

        # Slugs name output directories, so the first file wins.
        if lesson.slug in seen:
            msg = f"{path}: slug '{lesson.slug}' already used by {seen[lesson.slug]}"
            logger.warning("Skipping lesson %s", msg)
            warnings.append(msg)
            continue
        seen[lesson.slug] = path
        lessons.append(lesson)

    lessons.sort(key=lambda lesson: lesson.sort_key)
    return lessons, warnings


def _slug_for(path: Path) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", path.stem.lower()).strip("-")
    return slug or "lesson"
