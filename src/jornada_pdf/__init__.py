"""Jornada das 3 Âncoras — devotional PDF generator."""

from jornada_pdf.version import __version__

__all__ = ["__version__"]
