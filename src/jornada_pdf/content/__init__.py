"""Devotional content package — fixed chapter data and models."""

from jornada_pdf.content.models import (
    BlockKind,
    BlockRole,
    BlockStyle,
    Chapter,
    ContentBlock,
    DevotionalContent,
    FontStyle,
)
from jornada_pdf.content.static_text import CHAPTERS, DEFAULT_CONTENT, chapters_as_dicts

__all__ = [
    "BlockKind",
    "BlockRole",
    "BlockStyle",
    "Chapter",
    "ContentBlock",
    "DevotionalContent",
    "FontStyle",
    "CHAPTERS",
    "DEFAULT_CONTENT",
    "chapters_as_dicts",
]
