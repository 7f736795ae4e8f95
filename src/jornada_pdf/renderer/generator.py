"""Top-level document generation: engine → blocks → layout → PDF file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jornada_pdf.content.models import DevotionalContent
from jornada_pdf.content.static_text import DEFAULT_CONTENT
from jornada_pdf.exceptions import LoadError, RenderError
from jornada_pdf.renderer.engine_loader import EngineSettings, ensure_engine
from jornada_pdf.renderer.layout import (
    LayoutSettings,
    ProgressCallback,
    build_blocks,
    layout,
)
from jornada_pdf.renderer.pdf_engine import render_to_pdf

logger = logging.getLogger(__name__)


def generate_pdf(
    content: DevotionalContent = DEFAULT_CONTENT,
    output_dir: Path = Path("output"),
    *,
    layout_settings: Optional[LayoutSettings] = None,
    engine_settings: Optional[EngineSettings] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Path:
    """Render *content* to ``output_dir / content.file_name``.

    Raises:
        LoadError: the PDF engine could not be acquired.
        RenderError: anything failed while laying out or saving.
    """
    def progress(step: str, detail: str, pct: int) -> None:
        if progress_callback:
            progress_callback(step, detail, pct)

    progress("engine", "Loading PDF library...", 5)
    engine = ensure_engine(engine_settings)

    try:
        blocks = build_blocks(content)
        document = layout(
            blocks,
            engine,
            layout_settings,
            footer_label=content.footer_label,
            progress_callback=progress_callback,
        )
        progress("save", f"Writing {document.page_count} page(s)...", 80)
        path = render_to_pdf(document, Path(output_dir) / content.file_name, engine)
    except LoadError:
        raise
    except Exception as exc:
        logger.exception("PDF rendering failed")
        raise RenderError(f"Could not render PDF: {exc}") from exc

    progress("done", "PDF ready", 100)
    return path
