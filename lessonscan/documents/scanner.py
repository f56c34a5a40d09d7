"""Lesson file discovery."""

from pathlib import Path

from ..models import LessonDocument

LESSON_SUFFIX = ".md"


def discover(lessons_dir: Path) -> list[Path]:
    """List lesson files directly inside ``lessons_dir``, sorted by name.

    The scan is not recursive: template scaffolding usually lives in
    subdirectories and is not a lesson. A missing directory yields ``[]``.
    """
    if not lessons_dir.is_dir():
        return []

    files = [
        path
        for path in lessons_dir.iterdir()
        if path.is_file() and path.name.endswith(LESSON_SUFFIX)
    ]
    return sorted(files, key=lambda p: p.name)


def read_document(path: Path) -> LessonDocument:
    """Read a lesson file as UTF-8 text."""
    return LessonDocument(path=path, raw_content=path.read_text(encoding="utf-8"))
