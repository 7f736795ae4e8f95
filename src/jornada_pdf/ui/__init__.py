"""Desktop UI package — pywebview reading page with a PDF download button."""

from __future__ import annotations


def launch() -> None:
    """Launch the desktop application."""
    from jornada_pdf.ui.app import main

    main()
