"""Custom exception hierarchy for jornada_pdf."""

from __future__ import annotations


class JornadaError(Exception):
    """Base exception for all jornada_pdf errors."""


class LoadError(JornadaError):
    """The PDF engine could not be acquired (import, network, or font failure)."""


class RenderError(JornadaError):
    """Errors laying out or writing the PDF document."""
