"""Block layout and pagination.

Turns ordered ``ContentBlock``s into positioned lines on pages.  All
geometry is in millimetres measured from the top-left corner of the page;
the emitter converts to PDF points.

Page breaks happen only before a chapter title, when the cursor has
passed ``LayoutSettings.title_break_y``.  An oversized block therefore
can run past the bottom of a page unless ``split_blocks`` is enabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from jornada_pdf.content.models import (
    BlockRole,
    BlockStyle,
    ContentBlock,
    DevotionalContent,
    FontStyle,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str, int], None]

# A4 portrait
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

PURPLE = (115, 17, 212)   # #7311d4
GOLD = (212, 175, 55)
GRAY = (100, 100, 100)
BLACK = (0, 0, 0)

DEFAULT_STYLES: dict[BlockRole, BlockStyle] = {
    BlockRole.TITLE: BlockStyle(FontStyle.BOLD, 18, BLACK, line_height=8, spacing=4),
    BlockRole.SUBTITLE: BlockStyle(FontStyle.BOLD, 12, PURPLE, line_height=6, spacing=4),
    BlockRole.INTRO: BlockStyle(FontStyle.NORMAL, 10, BLACK, line_height=4.5, spacing=5),
    BlockRole.VERSE: BlockStyle(FontStyle.ITALIC, 9, BLACK, line_height=4.5, spacing=8),
    BlockRole.CHAPTER_TITLE: BlockStyle(FontStyle.BOLD, 11, PURPLE, line_height=5, spacing=3),
    BlockRole.QUOTE: BlockStyle(FontStyle.ITALIC, 8, GRAY, indent=3, wrap_inset=5,
                                line_height=4, spacing=4),
    BlockRole.SUMMARY: BlockStyle(FontStyle.NORMAL, 9, BLACK, indent=3, wrap_inset=5,
                                  line_height=4, spacing=3),
    BlockRole.REFLECTION: BlockStyle(FontStyle.ITALIC, 9, BLACK, indent=3, wrap_inset=5,
                                     line_height=4, spacing=3),
    BlockRole.ACTION: BlockStyle(FontStyle.BOLD, 9, GOLD, indent=3, wrap_inset=5,
                                 line_height=4, spacing=10),
}

FOOTER_STYLE = BlockStyle(FontStyle.NORMAL, 8, (150, 150, 150))


@dataclass
class LayoutSettings:
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM
    margin: float = 15.0
    top: float = 20.0                   # cursor start on every page
    title_break_margin: float = 47.0    # 250 mm on A4
    separator_offset: float = 5.0       # rule sits this far above the cursor
    separator_color: tuple[int, int, int] = (200, 200, 200)
    separator_width: float = 0.2
    footer_offset: float = 10.0         # footer baseline above the page bottom
    footer_style: BlockStyle = FOOTER_STYLE
    split_blocks: bool = False          # break inside blocks near the bottom
    bottom_margin: float = 20.0         # only used when split_blocks is on

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def title_break_y(self) -> float:
        return self.page_height - self.title_break_margin

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.bottom_margin


class TextMeasurer(Protocol):
    def split_text_to_size(
        self, text: str, max_width: float, font_style: FontStyle, size: float,
    ) -> list[str]:
        ...


@dataclass
class RenderedLine:
    text: str
    x: float
    y: float            # baseline
    style: BlockStyle
    role: Optional[BlockRole] = None


@dataclass
class Rule:
    x1: float
    x2: float
    y: float
    color: tuple[int, int, int]
    width: float


@dataclass
class Page:
    number: int
    lines: list[RenderedLine] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    footer: Optional[RenderedLine] = None

    @property
    def is_empty(self) -> bool:
        return not self.lines and not self.rules


@dataclass
class Document:
    page_width: float
    page_height: float
    pages: list[Page] = field(default_factory=list)
    cursor: float = 0.0                 # y after the last block
    breaks_before: list[int] = field(default_factory=list)  # block indices

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def texts(self) -> list[str]:
        """All body line texts in reading order (footers excluded)."""
        return [line.text for page in self.pages for line in page.lines]


def build_blocks(
    content: DevotionalContent,
    styles: Optional[dict[BlockRole, BlockStyle]] = None,
) -> list[ContentBlock]:
    """Flatten *content* into ordered blocks.

    Header, subtitle, introduction and verse come first, then each
    chapter's five fields.  Every chapter but the last gets a separator.
    """
    styles = {**DEFAULT_STYLES, **(styles or {})}

    def block(text: str, role: BlockRole, **flags) -> ContentBlock:
        return ContentBlock(text=text, role=role, style=styles[role], **flags)

    blocks = [
        block(content.title, BlockRole.TITLE),
        block(content.subtitle, BlockRole.SUBTITLE),
        block(content.introduction, BlockRole.INTRO),
        block(content.verse, BlockRole.VERSE),
    ]

    last = len(content.chapters) - 1
    for index, chapter in enumerate(content.chapters):
        blocks.append(block(chapter.title, BlockRole.CHAPTER_TITLE, starts_chapter=True))
        blocks.append(block(chapter.quote, BlockRole.QUOTE))
        blocks.append(block(chapter.summary, BlockRole.SUMMARY))
        blocks.append(block(chapter.reflection, BlockRole.REFLECTION))
        blocks.append(block(chapter.action, BlockRole.ACTION,
                            separator_after=index < last))
    return blocks


def footer_text(label: str, number: int, total: int) -> str:
    page_label = f"Página {number} de {total}"
    return f"{label} - {page_label}" if label else page_label


def layout(
    blocks: Sequence[ContentBlock],
    measurer: TextMeasurer,
    settings: Optional[LayoutSettings] = None,
    *,
    footer_label: str = "",
    progress_callback: Optional[ProgressCallback] = None,
) -> Document:
    """Lay out *blocks* onto pages and stamp a footer on each page."""
    settings = settings or LayoutSettings()
    doc = Document(page_width=settings.page_width, page_height=settings.page_height)

    def new_page() -> Page:
        page = Page(number=len(doc.pages) + 1)
        doc.pages.append(page)
        return page

    page = new_page()
    y = settings.top
    total = len(blocks)

    for index, block in enumerate(blocks):
        if block.starts_chapter and y > settings.title_break_y:
            logger.debug("Page break before block %d (y=%.1f > %.1f)",
                         index, y, settings.title_break_y)
            page = new_page()
            y = settings.top
            doc.breaks_before.append(index)

        style = block.style
        width = settings.content_width - style.wrap_inset
        lines = measurer.split_text_to_size(block.text, width, style.font_style, style.size)
        x = settings.margin + style.indent

        for text in lines:
            if settings.split_blocks and not page.is_empty and y > settings.bottom_limit:
                logger.debug("Splitting block %d across pages", index)
                page = new_page()
                y = settings.top
            page.lines.append(RenderedLine(text=text, x=x, y=y, style=style, role=block.role))
            y += style.line_height
        y += style.spacing

        if block.separator_after:
            page.rules.append(Rule(
                x1=settings.margin,
                x2=settings.page_width - settings.margin,
                y=y - settings.separator_offset,
                color=settings.separator_color,
                width=settings.separator_width,
            ))

        if progress_callback:
            progress_callback("layout", f"Laid out block {index + 1}/{total}",
                              10 + int(60 * (index + 1) / max(total, 1)))

    doc.cursor = y
    _stamp_footers(doc, settings, footer_label)
    return doc


def _stamp_footers(doc: Document, settings: LayoutSettings, label: str) -> None:
    total = len(doc.pages)
    for page in doc.pages:
        page.footer = RenderedLine(
            text=footer_text(label, page.number, total),
            x=settings.margin,
            y=settings.page_height - settings.footer_offset,
            style=settings.footer_style,
        )
