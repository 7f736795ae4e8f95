"""Visual feedback on the control that triggered a download.

The generation core never touches the UI; the bridge drives a
``ControlFeedback`` around it instead.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

BUSY_LABEL = "Gerando PDF..."
SUCCESS_LABEL = "PDF Baixado!"
RESET_DELAY_MS = 2000


class ControlHandle(Protocol):
    def get_label(self) -> str:
        ...

    def set_label(self, label: str) -> None:
        ...

    def set_enabled(self, enabled: bool) -> None:
        ...


class WebviewControl:
    """A DOM element in the pywebview window, addressed by id."""

    def __init__(self, window, element_id: str) -> None:
        self._window = window
        self._element = f"document.getElementById({json.dumps(element_id)})"

    def get_label(self) -> str:
        label = self._window.evaluate_js(f"({self._element} || {{}}).innerHTML || ''")
        return label or ""

    def set_label(self, label: str) -> None:
        self._window.evaluate_js(
            f"(function(el){{ if (el) el.innerHTML = {json.dumps(label)}; }})({self._element})"
        )

    def set_enabled(self, enabled: bool) -> None:
        disabled = "false" if enabled else "true"
        self._window.evaluate_js(
            f"(function(el){{ if (el) el.disabled = {disabled}; }})({self._element})"
        )


class ControlFeedback:
    """Busy → success/failure → original state, for an optional control.

    On success the original label comes back after ``reset_delay_ms``;
    on failure it comes back immediately.
    """

    def __init__(
        self,
        control: Optional[ControlHandle],
        reset_delay_ms: int = RESET_DELAY_MS,
    ) -> None:
        self._control = control
        self._reset_delay = reset_delay_ms / 1000
        self._original_label = ""
        self._timer: Optional[threading.Timer] = None

    def start(self) -> None:
        if self._control is None:
            return
        self._original_label = self._control.get_label()
        self._control.set_label(BUSY_LABEL)
        self._control.set_enabled(False)

    def succeed(self) -> None:
        if self._control is None:
            return
        self._control.set_label(SUCCESS_LABEL)
        self._timer = threading.Timer(self._reset_delay, self.restore)
        self._timer.daemon = True
        self._timer.start()

    def fail(self) -> None:
        self.restore()

    def restore(self) -> None:
        if self._control is None:
            return
        try:
            self._control.set_label(self._original_label)
            self._control.set_enabled(True)
        except Exception:
            # The window may be gone by the time the timer fires
            logger.debug("Could not restore control state", exc_info=True)
