"""Python-JS bridge for the devotional UI.

All public methods are exposed to JavaScript via pywebview's js_api.
Every method returns a dict with at least {"success": bool}.
"""

from __future__ import annotations

import json
import logging
import platform
import subprocess
from pathlib import Path
from typing import Optional

import webview

from jornada_pdf.config import AppConfig, load_config, save_output_dir
from jornada_pdf.content.static_text import DEFAULT_CONTENT, chapters_as_dicts
from jornada_pdf.exceptions import LoadError, RenderError
from jornada_pdf.ui.feedback import ControlFeedback, ControlHandle, WebviewControl

logger = logging.getLogger(__name__)


class DevotionalAPI:
    """Bridge between the pywebview JS frontend and the PDF generator."""

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._config = config or load_config()
        self._window: Optional[webview.Window] = None

    def set_window(self, window: webview.Window) -> None:
        self._window = window

    @staticmethod
    def _classify_error(error: Exception) -> str:
        """Classify an exception for the UI error_type field."""
        if isinstance(error, LoadError):
            return "load"
        if isinstance(error, RenderError):
            return "render"
        if isinstance(error, (ValueError, TypeError)):
            return "validation"
        return "internal"

    def _push_progress(self, step: str, detail: str, pct: int) -> None:
        """Push progress update to the JS frontend."""
        if self._window:
            payload = json.dumps({"step": step, "detail": detail, "pct": pct})
            self._window.evaluate_js(f"updateProgress({payload})")

    def _notify_error(self, message: str) -> None:
        """Show a blocking error dialog in the window."""
        if self._window:
            self._window.create_confirmation_dialog("Erro", message)

    def _make_control(self, control_id: Optional[str]) -> Optional[ControlHandle]:
        if not control_id or not self._window:
            return None
        return WebviewControl(self._window, control_id)

    # ── Content ───────────────────────────────────────────────────────

    def get_chapters(self) -> dict:
        """Return the chapter data for on-page rendering."""
        return {
            "success": True,
            "title": DEFAULT_CONTENT.title,
            "subtitle": DEFAULT_CONTENT.subtitle,
            "chapters": chapters_as_dicts(DEFAULT_CONTENT.chapters),
        }

    # ── Output directory ──────────────────────────────────────────────

    def get_output_dir(self) -> dict:
        return {"success": True, "path": str(self._config.output_dir)}

    def set_output_dir(self, path: str) -> dict:
        """Persist output directory preference."""
        if not path:
            return {"success": False, "error": "No folder given",
                    "error_type": "validation"}
        self._config.output_dir = Path(path)
        save_output_dir(path)
        return {"success": True, "path": path}

    def choose_output_directory(self) -> dict:
        """Open native folder picker dialog."""
        try:
            if not self._window:
                return {"success": False, "error": "Window not available",
                        "error_type": "internal"}

            result = self._window.create_file_dialog(
                webview.FOLDER_DIALOG,
                directory=str(self._config.output_dir),
            )
            if result and len(result) > 0:
                return self.set_output_dir(result[0])
            return {"success": False, "error": "No folder selected",
                    "error_type": "validation"}
        except Exception as e:
            logger.exception("Error choosing output directory")
            return {"success": False, "error": str(e),
                    "error_type": self._classify_error(e)}

    # ── Generation ────────────────────────────────────────────────────

    def download_pdf(self, control_id: Optional[str] = None) -> dict:
        """Generate the devotional PDF into the output directory.

        Args:
            control_id: DOM id of the button that triggered the download;
                it shows busy/success feedback and is restored afterwards.
        """
        from jornada_pdf.renderer import generate_pdf

        feedback = ControlFeedback(self._make_control(control_id))
        feedback.start()
        try:
            path = generate_pdf(
                DEFAULT_CONTENT,
                self._config.output_dir,
                layout_settings=self._config.layout_settings(),
                engine_settings=self._config.engine_settings(),
                progress_callback=self._push_progress,
            )
        except Exception as e:
            logger.exception("PDF generation failed")
            feedback.fail()
            self._notify_error(f"Erro ao gerar PDF: {e}")
            return {"success": False, "error": str(e),
                    "error_type": self._classify_error(e)}

        feedback.succeed()
        return {"success": True, "path": str(path)}

    # ── Utilities ─────────────────────────────────────────────────────

    def open_output_folder(self) -> dict:
        """Open the output folder in the system file manager."""
        try:
            folder = Path(self._config.output_dir)
            if not folder.exists():
                return {"success": False, "error": f"Folder not found: {folder}",
                        "error_type": "validation"}

            system = platform.system()
            if system == "Darwin":
                subprocess.Popen(["open", str(folder)])
            elif system == "Windows":
                subprocess.Popen(["explorer", str(folder)])
            else:
                subprocess.Popen(["xdg-open", str(folder)])

            return {"success": True}
        except Exception as e:
            logger.exception("Error opening folder")
            return {"success": False, "error": str(e),
                    "error_type": self._classify_error(e)}
