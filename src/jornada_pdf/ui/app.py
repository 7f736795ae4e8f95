"""Desktop application entry point — pywebview window + DevotionalAPI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import webview

from jornada_pdf.config import load_config
from jornada_pdf.ui.api import DevotionalAPI

logger = logging.getLogger(__name__)

if getattr(sys, "frozen", False):
    TEMPLATES_DIR = Path(sys._MEIPASS) / "jornada_pdf" / "ui" / "templates"
else:
    TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def main() -> None:
    """Launch the Jornada das 3 Âncoras desktop application."""
    config = load_config()

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    api = DevotionalAPI(config)

    window = webview.create_window(
        title="A Jornada das 3 Âncoras",
        url=str(TEMPLATES_DIR / "index.html"),
        js_api=api,
        width=800,
        height=700,
        min_size=(600, 500),
    )

    api.set_window(window)
    webview.start(debug=config.debug)


if __name__ == "__main__":
    main()
