"""Document rendering package — lays out and writes the devotional PDF.

Uses PyMuPDF, loaded lazily through ``ensure_engine``.
"""

from __future__ import annotations

from jornada_pdf.renderer.engine_loader import EngineSettings, ensure_engine, reset_engine
from jornada_pdf.renderer.generator import generate_pdf
from jornada_pdf.renderer.layout import LayoutSettings, build_blocks, layout

__all__ = [
    "EngineSettings",
    "LayoutSettings",
    "build_blocks",
    "ensure_engine",
    "generate_pdf",
    "layout",
    "reset_engine",
]
