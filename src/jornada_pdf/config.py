"""Application configuration from the environment and ~/.jornada-pdf/config.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from jornada_pdf.content.models import FontStyle
from jornada_pdf.renderer.engine_loader import EngineSettings
from jornada_pdf.renderer.layout import LayoutSettings

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".jornada-pdf"
DEFAULT_OUTPUT_DIR = Path.home() / "Downloads"


def config_path() -> Path:
    return CONFIG_DIR / "config.json"


def read_config() -> dict:
    """Read config.json, returning empty dict on error."""
    try:
        path = config_path()
        if path.exists():
            return json.loads(path.read_text())
    except Exception:
        logger.debug("Could not read config", exc_info=True)
    return {}


def write_config(data: dict) -> None:
    """Write config.json with 0600 permissions."""
    try:
        path = config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))
        path.chmod(0o600)
    except Exception:
        logger.debug("Could not write config", exc_info=True)


def save_output_dir(path: str | Path) -> None:
    """Persist the output directory preference."""
    data = read_config()
    data["output_dir"] = str(path)
    write_config(data)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true")


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default


@dataclass
class AppConfig:
    output_dir: Path = DEFAULT_OUTPUT_DIR
    font_urls: dict[FontStyle, str] = field(default_factory=dict)
    fetch_timeout: float = 30.0
    split_blocks: bool = False
    debug: bool = False

    def engine_settings(self) -> EngineSettings:
        return EngineSettings(
            font_urls=dict(self.font_urls),
            font_cache_dir=CONFIG_DIR / "fonts",
            fetch_timeout=self.fetch_timeout,
        )

    def layout_settings(self) -> LayoutSettings:
        return LayoutSettings(split_blocks=self.split_blocks)


def load_config() -> AppConfig:
    """Build an AppConfig from .env, environment variables and config.json.

    Environment wins over config.json for the output directory.
    """
    from dotenv import load_dotenv

    load_dotenv()

    saved = read_config()
    output_dir = os.environ.get("JORNADA_OUTPUT_DIR") or saved.get("output_dir") or ""

    font_urls = {}
    for font_style in FontStyle:
        url = os.environ.get(f"JORNADA_FONT_URL_{font_style.name}", "")
        if url:
            font_urls[font_style] = url

    return AppConfig(
        output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
        font_urls=font_urls,
        fetch_timeout=_env_float("JORNADA_FETCH_TIMEOUT", 30.0),
        split_blocks=_env_flag("JORNADA_SPLIT_BLOCKS"),
        debug=_env_flag("DEBUG"),
    )
