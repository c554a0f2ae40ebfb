"""Lesson content loading."""

from .lessons import Lesson, LessonError, LessonMeta, load_lesson, load_lessons, parse_front_matter

__all__ = [
    "Lesson",
    "LessonError",
    "LessonMeta",
    "load_lesson",
    "load_lessons",
    "parse_front_matter",
]
