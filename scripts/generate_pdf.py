"""
Generate the devotional PDF without the desktop UI.

Usage:
    source venv/bin/activate
    python scripts/generate_pdf.py [--split-blocks]

Produces output/Jornada_3_Ancoras.pdf and prints the page count.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from jornada_pdf.config import load_config
from jornada_pdf.exceptions import JornadaError
from jornada_pdf.renderer import LayoutSettings, generate_pdf
from jornada_pdf.renderer.pdf_engine import count_pages

OUTPUT_DIR = Path(__file__).resolve().parents[1] / "output"


def _print_progress(step: str, detail: str, pct: int) -> None:
    print(f"  [{pct:3d}%] {detail}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--split-blocks", action="store_true",
                        help="break long blocks across pages instead of overflowing")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR)
    args = parser.parse_args()

    config = load_config()
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    print("Generating PDF...")
    try:
        path = generate_pdf(
            output_dir=args.output_dir,
            layout_settings=LayoutSettings(split_blocks=args.split_blocks or config.split_blocks),
            engine_settings=config.engine_settings(),
            progress_callback=_print_progress,
        )
    except JornadaError as exc:
        print(f"  FAILED: {exc}")
        return 1

    print(f"  Saved: {path} ({count_pages(path)} page(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
