"""Data models for devotional content and its layout blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FontStyle(Enum):
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


class BlockKind(Enum):
    """Typographic family of a block."""
    HEADING = "heading"
    SUBHEADING = "subheading"
    BODY = "body"
    EMPHASIS = "emphasis"
    CALLOUT = "callout"


class BlockRole(Enum):
    """Semantic slot a block fills in the document.

    Each role maps to exactly one BlockKind and one default BlockStyle.
    """
    TITLE = "title"
    SUBTITLE = "subtitle"
    INTRO = "intro"
    VERSE = "verse"
    CHAPTER_TITLE = "chapter_title"
    QUOTE = "quote"
    SUMMARY = "summary"
    REFLECTION = "reflection"
    ACTION = "action"

    @property
    def kind(self) -> BlockKind:
        return _ROLE_KINDS[self]


_ROLE_KINDS: dict[BlockRole, BlockKind] = {
    BlockRole.TITLE: BlockKind.HEADING,
    BlockRole.SUBTITLE: BlockKind.SUBHEADING,
    BlockRole.INTRO: BlockKind.BODY,
    BlockRole.VERSE: BlockKind.EMPHASIS,
    BlockRole.CHAPTER_TITLE: BlockKind.SUBHEADING,
    BlockRole.QUOTE: BlockKind.EMPHASIS,
    BlockRole.SUMMARY: BlockKind.BODY,
    BlockRole.REFLECTION: BlockKind.EMPHASIS,
    BlockRole.ACTION: BlockKind.CALLOUT,
}

# Order in which a chapter's fields are laid out
CHAPTER_ROLES: tuple[BlockRole, ...] = (
    BlockRole.CHAPTER_TITLE,
    BlockRole.QUOTE,
    BlockRole.SUMMARY,
    BlockRole.REFLECTION,
    BlockRole.ACTION,
)


@dataclass(frozen=True)
class BlockStyle:
    """Fixed typography for one block role.

    Geometry (indent, wrap_inset, line_height, spacing) is in millimetres;
    size is in points.
    """
    font_style: FontStyle
    size: float
    color: tuple[int, int, int] = (0, 0, 0)
    indent: float = 0.0        # shift from the left margin
    wrap_inset: float = 0.0    # subtracted from the content width when wrapping
    line_height: float = 4.0
    spacing: float = 3.0       # added after the block's last line


@dataclass(frozen=True)
class ContentBlock:
    text: str
    role: BlockRole
    style: BlockStyle
    starts_chapter: bool = False    # page-break check happens before this block
    separator_after: bool = False   # rule drawn under this block

    @property
    def kind(self) -> BlockKind:
        return self.role.kind


@dataclass(frozen=True)
class Chapter:
    title: str
    quote: str          # scripture quote with citation
    summary: str
    reflection: str
    action: str         # "Ação Prática: ..." call to action

    def fields(self) -> tuple[str, ...]:
        """Return the five fields in layout order."""
        return (self.title, self.quote, self.summary, self.reflection, self.action)


@dataclass(frozen=True)
class DevotionalContent:
    """Everything the layout engine needs to render one document."""
    title: str
    subtitle: str
    introduction: str
    verse: str
    chapters: tuple[Chapter, ...] = field(default_factory=tuple)
    footer_label: str = ""
    file_name: str = "document.pdf"
