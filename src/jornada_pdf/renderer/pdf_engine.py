"""PyMuPDF-based emitter for laid-out documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from jornada_pdf.renderer.engine_loader import PT_PER_MM

if TYPE_CHECKING:
    from jornada_pdf.renderer.engine_loader import EngineHandle
    from jornada_pdf.renderer.layout import Document, RenderedLine

logger = logging.getLogger(__name__)


def mm_to_pt(value: float) -> float:
    return value * PT_PER_MM


def _rgb(color: tuple[int, int, int]) -> tuple[float, float, float]:
    """0-255 RGB to the 0-1 floats PyMuPDF expects."""
    return tuple(c / 255 for c in color)


def _draw_line(pdf_page, line: RenderedLine, engine: EngineHandle) -> None:
    font = engine.font_for(line.style.font_style)
    kwargs = {
        "fontname": font.fontname,
        "fontsize": line.style.size,
        "color": _rgb(line.style.color),
    }
    if font.fontfile is not None:
        kwargs["fontfile"] = str(font.fontfile)
    pdf_page.insert_text(
        engine.module.Point(mm_to_pt(line.x), mm_to_pt(line.y)),
        line.text,
        **kwargs,
    )


def _draw_document(document: Document, engine: EngineHandle):
    """Draw every page of *document* into a new engine document."""
    fitz = engine.module
    pdf = engine.new_document()
    width = mm_to_pt(document.page_width)
    height = mm_to_pt(document.page_height)

    for page in document.pages:
        pdf_page = pdf.new_page(width=width, height=height)
        for line in page.lines:
            _draw_line(pdf_page, line, engine)
        for rule in page.rules:
            pdf_page.draw_line(
                fitz.Point(mm_to_pt(rule.x1), mm_to_pt(rule.y)),
                fitz.Point(mm_to_pt(rule.x2), mm_to_pt(rule.y)),
                color=_rgb(rule.color),
                width=mm_to_pt(rule.width),
            )
        if page.footer is not None:
            _draw_line(pdf_page, page.footer, engine)

    return pdf


def render_to_pdf(document: Document, output_path: Path, engine: EngineHandle) -> Path:
    """Write *document* to *output_path* (suffix forced to .pdf).

    Returns:
        Path to the generated PDF.
    """
    output_path = Path(output_path).with_suffix(".pdf")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    pdf = _draw_document(document, engine)
    try:
        pdf.save(str(output_path))
    finally:
        pdf.close()

    logger.info("Saved %d page(s) to %s", document.page_count, output_path)
    return output_path


def render_to_bytes(document: Document, engine: EngineHandle) -> bytes:
    """Serialize *document* to PDF bytes without touching the filesystem."""
    pdf = _draw_document(document, engine)
    try:
        return pdf.tobytes()
    finally:
        pdf.close()


def count_pages(pdf_path: Path) -> int | None:
    """Count pages in a PDF file. Returns None on failure."""
    try:
        from pypdf import PdfReader
        from pypdf.errors import PdfReadError
        return len(PdfReader(str(pdf_path)).pages)
    except ImportError:
        return None
    except (OSError, ValueError, PdfReadError):
        logger.warning("Could not count pages in %s", pdf_path)
        return None
