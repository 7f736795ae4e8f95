"""Lazy, single-initialization loader for the PDF engine (PyMuPDF).

The engine is imported on first use only.  Concurrent first callers share
one in-flight ``Future``, so the import and any remote font downloads run
exactly once per process.  A failed acquisition clears the memo so the
next invocation tries again.
"""

from __future__ import annotations

import hashlib
import importlib
import logging
import sys
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx

from jornada_pdf.content.models import FontStyle
from jornada_pdf.exceptions import LoadError
from jornada_pdf.renderer.text_utils import wrap_text

logger = logging.getLogger(__name__)

ENGINE_MODULE = "fitz"

PT_PER_MM = 72 / 25.4

FONT_CACHE_DIR = Path.home() / ".jornada-pdf" / "fonts"

# PyMuPDF Base-14 names: Helvetica, Helvetica-Bold, Helvetica-Oblique
BASE14_FONTS = {
    FontStyle.NORMAL: "helv",
    FontStyle.BOLD: "hebo",
    FontStyle.ITALIC: "heit",
}


@dataclass
class EngineSettings:
    """How to acquire the engine.

    ``font_urls`` maps a font style to a TrueType URL; styles without one
    use the built-in Helvetica variants and never touch the network.
    """
    font_urls: dict[FontStyle, str] = field(default_factory=dict)
    font_cache_dir: Path = FONT_CACHE_DIR
    fetch_timeout: float = 30.0


@dataclass(frozen=True)
class FontSpec:
    fontname: str                       # name registered on each page
    fontfile: Optional[Path] = None     # None = Base-14 font


class EngineHandle:
    """An acquired PDF engine plus the fonts it renders with."""

    def __init__(self, module, fonts: dict[FontStyle, FontSpec]) -> None:
        self.module = module
        self.fonts = fonts
        self._font_objects: dict[FontStyle, object] = {}

    def font_for(self, font_style: FontStyle) -> FontSpec:
        return self.fonts.get(font_style, self.fonts[FontStyle.NORMAL])

    def text_width(self, text: str, font_style: FontStyle, size: float) -> float:
        """Width of *text* in millimetres."""
        spec = self.font_for(font_style)
        if spec.fontfile is None:
            points = self.module.get_text_length(text, fontname=spec.fontname, fontsize=size)
        else:
            font = self._font_objects.get(font_style)
            if font is None:
                font = self.module.Font(fontfile=str(spec.fontfile))
                self._font_objects[font_style] = font
            points = font.text_length(text, fontsize=size)
        return points / PT_PER_MM

    def split_text_to_size(
        self, text: str, max_width: float, font_style: FontStyle, size: float,
    ) -> list[str]:
        """Word-wrap *text* to *max_width* millimetres in the given font."""
        return wrap_text(text, max_width, lambda s: self.text_width(s, font_style, size))

    def new_document(self):
        return self.module.open()


# ── Remote fonts ──────────────────────────────────────────────────────


def _font_cache_path(cache_dir: Path, font_style: FontStyle, url: str) -> Path:
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:12]
    return cache_dir / f"{font_style.value}-{digest}.ttf"


def fetch_font(url: str, dest: Path, timeout: float = 30.0) -> Path:
    """Download a font file to *dest* unless it is already cached.

    Raises LoadError on any network or HTTP failure; partial downloads
    are removed.
    """
    if dest.exists() and dest.stat().st_size > 0:
        logger.debug("Font cache hit: %s", dest)
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        with httpx.stream("GET", url, follow_redirects=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in resp.iter_bytes(chunk_size=65536):
                    f.write(chunk)
    except Exception as exc:
        if dest.exists():
            dest.unlink()
        raise LoadError(f"Could not download font {url}: {exc}") from exc

    logger.info("Downloaded font %s -> %s", url, dest)
    return dest


# ── Acquisition ───────────────────────────────────────────────────────


def _import_engine():
    """Return the engine module, reusing it when the host already imported it."""
    module = sys.modules.get(ENGINE_MODULE)
    if module is None:
        try:
            module = importlib.import_module(ENGINE_MODULE)
        except ImportError as exc:
            logger.error("Failed to import PDF engine %r", ENGINE_MODULE)
            raise LoadError("Could not load the PDF library (PyMuPDF)") from exc

    if not hasattr(module, "open"):
        raise LoadError(f"PDF library {ENGINE_MODULE!r} is not usable after import")
    return module


def _acquire_engine(settings: EngineSettings) -> EngineHandle:
    module = _import_engine()

    fonts: dict[FontStyle, FontSpec] = {}
    for font_style, base14 in BASE14_FONTS.items():
        url = settings.font_urls.get(font_style)
        if not url:
            fonts[font_style] = FontSpec(fontname=base14)
            continue
        path = fetch_font(
            url,
            _font_cache_path(settings.font_cache_dir, font_style, url),
            timeout=settings.fetch_timeout,
        )
        fonts[font_style] = FontSpec(fontname=f"J{font_style.value}", fontfile=path)

    logger.info("PDF engine loaded (%s %s)", ENGINE_MODULE,
                getattr(module, "VersionBind", "unknown version"))
    return EngineHandle(module, fonts)


_lock = threading.Lock()
_engine_future: Optional[Future] = None


def ensure_engine(settings: Optional[EngineSettings] = None) -> EngineHandle:
    """Return the process-wide engine handle, acquiring it on first use.

    The first successful acquisition wins: later *settings* are ignored
    until ``reset_engine()`` is called.
    """
    global _engine_future

    with _lock:
        future = _engine_future
        owner = future is None
        if owner:
            future = _engine_future = Future()

    if owner:
        try:
            handle = _acquire_engine(settings or EngineSettings())
        except Exception as exc:
            error = exc if isinstance(exc, LoadError) else LoadError(str(exc))
            if error is not exc:
                error.__cause__ = exc
            with _lock:
                _engine_future = None
            future.set_exception(error)
        else:
            future.set_result(handle)

    return future.result()


def reset_engine() -> None:
    """Forget the acquired engine so the next call loads it again."""
    global _engine_future
    with _lock:
        _engine_future = None
