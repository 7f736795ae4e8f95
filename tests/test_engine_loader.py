"""Tests for the lazy PDF engine loader (jornada_pdf.renderer.engine_loader)."""

from __future__ import annotations

import sys
import threading
import time
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import pytest

from jornada_pdf.content.models import FontStyle
from jornada_pdf.exceptions import LoadError
from jornada_pdf.renderer import engine_loader
from jornada_pdf.renderer.engine_loader import (
    PT_PER_MM,
    EngineHandle,
    EngineSettings,
    FontSpec,
    ensure_engine,
    fetch_font,
    reset_engine,
)

MODULE = "jornada_pdf.renderer.engine_loader"


@pytest.fixture(autouse=True)
def _fresh_engine():
    reset_engine()
    yield
    reset_engine()


def fake_fitz() -> MagicMock:
    module = MagicMock(name="fitz")
    module.get_text_length.side_effect = lambda text, fontname, fontsize: len(text) * PT_PER_MM
    return module


def base14_fonts() -> dict[FontStyle, FontSpec]:
    return {style: FontSpec(fontname=name) for style, name in engine_loader.BASE14_FONTS.items()}


class TestEnsureEngine:
    def test_reuses_module_already_imported(self):
        module = fake_fitz()
        with patch.dict(sys.modules, {"fitz": module}), \
                patch(f"{MODULE}.importlib.import_module") as mock_import:
            handle = ensure_engine()

        assert handle.module is module
        mock_import.assert_not_called()

    def test_imports_when_missing(self):
        module = fake_fitz()
        with patch.dict(sys.modules):
            sys.modules.pop("fitz", None)
            with patch(f"{MODULE}.importlib.import_module", return_value=module) as mock_import:
                handle = ensure_engine()

        mock_import.assert_called_once_with("fitz")
        assert handle.module is module

    def test_import_error_raises_load_error(self):
        with patch.dict(sys.modules):
            sys.modules.pop("fitz", None)
            with patch(f"{MODULE}.importlib.import_module",
                       side_effect=ImportError("No module named 'fitz'")):
                with pytest.raises(LoadError) as exc_info:
                    ensure_engine()

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_module_without_api_raises_load_error(self):
        with patch.dict(sys.modules, {"fitz": SimpleNamespace()}):
            with pytest.raises(LoadError, match="not usable"):
                ensure_engine()

    def test_failure_is_not_memoized(self):
        module = fake_fitz()
        with patch.dict(sys.modules):
            sys.modules.pop("fitz", None)
            with patch(f"{MODULE}.importlib.import_module",
                       side_effect=[ImportError("offline"), module]) as mock_import:
                with pytest.raises(LoadError):
                    ensure_engine()
                handle = ensure_engine()

        assert handle.module is module
        assert mock_import.call_count == 2

    def test_unexpected_error_wrapped(self):
        with patch(f"{MODULE}._acquire_engine", side_effect=RuntimeError("boom")):
            with pytest.raises(LoadError, match="boom") as exc_info:
                ensure_engine()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_handle_memoized(self):
        handle = EngineHandle(fake_fitz(), base14_fonts())
        with patch(f"{MODULE}._acquire_engine", return_value=handle) as mock_acquire:
            assert ensure_engine() is handle
            assert ensure_engine() is handle
        mock_acquire.assert_called_once()

    def test_reset_forces_reload(self):
        with patch(f"{MODULE}._acquire_engine",
                   side_effect=lambda settings: EngineHandle(fake_fitz(), base14_fonts())) as mock_acquire:
            first = ensure_engine()
            reset_engine()
            second = ensure_engine()
        assert first is not second
        assert mock_acquire.call_count == 2

    def test_concurrent_first_calls_load_once(self):
        release = threading.Event()
        handle = EngineHandle(fake_fitz(), base14_fonts())
        calls = []

        def slow_acquire(settings):
            calls.append(settings)
            release.wait(timeout=5)
            return handle

        results = []
        with patch(f"{MODULE}._acquire_engine", side_effect=slow_acquire):
            threads = [threading.Thread(target=lambda: results.append(ensure_engine()))
                       for _ in range(5)]
            for t in threads:
                t.start()
            release.set()
            for t in threads:
                t.join(timeout=5)

        assert len(calls) == 1
        assert results == [handle] * 5

    def test_concurrent_callers_share_failure(self):
        release = threading.Event()

        def failing_acquire(settings):
            release.wait(timeout=5)
            raise LoadError("offline")

        errors = []

        def call():
            try:
                ensure_engine()
            except LoadError as exc:
                errors.append(exc)

        with patch(f"{MODULE}._acquire_engine", side_effect=failing_acquire) as mock_acquire:
            threads = [threading.Thread(target=call) for _ in range(3)]
            for t in threads:
                t.start()
            time.sleep(0.2)  # let every caller reach the shared future
            release.set()
            for t in threads:
                t.join(timeout=5)

        assert len(errors) == 3
        assert mock_acquire.call_count == 1


class TestAcquireFonts:
    def test_base14_without_urls(self):
        with patch.dict(sys.modules, {"fitz": fake_fitz()}), \
                patch(f"{MODULE}.fetch_font") as mock_fetch:
            handle = ensure_engine(EngineSettings())

        mock_fetch.assert_not_called()
        assert handle.font_for(FontStyle.BOLD) == FontSpec("hebo")
        assert handle.font_for(FontStyle.ITALIC) == FontSpec("heit")

    def test_remote_font_for_configured_style(self, tmp_path):
        settings = EngineSettings(
            font_urls={FontStyle.BOLD: "https://fonts.example.com/bold.ttf"},
            font_cache_dir=tmp_path,
        )
        cached = tmp_path / "bold.ttf"
        with patch.dict(sys.modules, {"fitz": fake_fitz()}), \
                patch(f"{MODULE}.fetch_font", return_value=cached) as mock_fetch:
            handle = ensure_engine(settings)

        mock_fetch.assert_called_once()
        url, dest = mock_fetch.call_args[0]
        assert url == "https://fonts.example.com/bold.ttf"
        assert dest.parent == tmp_path
        assert mock_fetch.call_args[1]["timeout"] == 30.0
        assert handle.font_for(FontStyle.BOLD) == FontSpec("Jbold", cached)
        assert handle.font_for(FontStyle.NORMAL) == FontSpec("helv")

    def test_font_download_failure_is_load_error(self, tmp_path):
        settings = EngineSettings(
            font_urls={FontStyle.NORMAL: "https://fonts.example.com/regular.ttf"},
            font_cache_dir=tmp_path,
        )
        with patch.dict(sys.modules, {"fitz": fake_fitz()}), \
                patch(f"{MODULE}.fetch_font", side_effect=LoadError("timed out")):
            with pytest.raises(LoadError, match="timed out"):
                ensure_engine(settings)


class TestFetchFont:
    @patch(f"{MODULE}.httpx.stream")
    def test_downloads_to_dest(self, mock_stream, tmp_path):
        mock_resp = MagicMock()
        mock_resp.iter_bytes.return_value = [b"font-", b"bytes"]
        mock_stream.return_value.__enter__.return_value = mock_resp

        dest = tmp_path / "fonts" / "normal.ttf"
        result = fetch_font("https://fonts.example.com/r.ttf", dest, timeout=5.0)

        assert result == dest
        assert dest.read_bytes() == b"font-bytes"
        assert mock_stream.call_args[1]["timeout"] == 5.0

    @patch(f"{MODULE}.httpx.stream")
    def test_cache_hit_skips_network(self, mock_stream, tmp_path):
        dest = tmp_path / "normal.ttf"
        dest.write_bytes(b"cached")

        assert fetch_font("https://fonts.example.com/r.ttf", dest) == dest
        mock_stream.assert_not_called()

    @patch(f"{MODULE}.httpx.stream")
    def test_timeout_raises_load_error(self, mock_stream, tmp_path):
        mock_stream.side_effect = httpx.TimeoutException("timed out")

        with pytest.raises(LoadError, match="timed out"):
            fetch_font("https://fonts.example.com/r.ttf", tmp_path / "x.ttf")

    @patch(f"{MODULE}.httpx.stream")
    def test_partial_download_removed(self, mock_stream, tmp_path):
        mock_resp = MagicMock()

        def broken_stream(chunk_size):
            yield b"partial"
            raise httpx.ReadError("connection reset")

        mock_resp.iter_bytes.side_effect = broken_stream
        mock_stream.return_value.__enter__.return_value = mock_resp

        dest = tmp_path / "x.ttf"
        with pytest.raises(LoadError):
            fetch_font("https://fonts.example.com/r.ttf", dest)
        assert not dest.exists()

    @patch(f"{MODULE}.httpx.stream")
    def test_http_error_raises_load_error(self, mock_stream, tmp_path):
        mock_resp = MagicMock()
        mock_resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "404 Not Found", request=MagicMock(), response=MagicMock(),
        )
        mock_stream.return_value.__enter__.return_value = mock_resp

        with pytest.raises(LoadError, match="404"):
            fetch_font("https://fonts.example.com/missing.ttf", tmp_path / "x.ttf")


class TestEngineHandle:
    def test_text_width_in_millimetres(self):
        handle = EngineHandle(fake_fitz(), base14_fonts())
        # fake engine: one char == 1 mm
        assert handle.text_width("abcd", FontStyle.NORMAL, 10) == pytest.approx(4.0)

    def test_text_width_uses_style_font(self):
        module = fake_fitz()
        handle = EngineHandle(module, base14_fonts())
        handle.text_width("x", FontStyle.ITALIC, 9)
        module.get_text_length.assert_called_with("x", fontname="heit", fontsize=9)

    def test_text_width_with_font_file(self, tmp_path):
        module = fake_fitz()
        module.Font.return_value.text_length.return_value = 72.0
        fonts = base14_fonts()
        fonts[FontStyle.BOLD] = FontSpec("Jbold", tmp_path / "bold.ttf")
        handle = EngineHandle(module, fonts)

        assert handle.text_width("abc", FontStyle.BOLD, 12) == pytest.approx(25.4)
        handle.text_width("def", FontStyle.BOLD, 12)
        module.Font.assert_called_once_with(fontfile=str(tmp_path / "bold.ttf"))

    def test_split_text_to_size(self):
        handle = EngineHandle(fake_fitz(), base14_fonts())
        lines = handle.split_text_to_size("aa bb cc", 5, FontStyle.NORMAL, 10)
        assert lines == ["aa bb", "cc"]
