"""Pure text utilities for block layout.

Provides greedy word wrapping against an arbitrary width-measuring
function.  No rendering library dependencies — the engine supplies the
measuring function, tests supply a fixed-width one.
"""

from __future__ import annotations

import re
from typing import Callable

Measure = Callable[[str], float]


def normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces/tabs within lines, preserving newlines."""
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def _fit_prefix(word: str, max_width: float, measure: Measure) -> str:
    """Longest prefix of *word* that fits in *max_width* (at least one char)."""
    end = 1
    while end < len(word) and measure(word[:end + 1]) <= max_width:
        end += 1
    return word[:end]


def wrap_text(text: str, max_width: float, measure: Measure) -> list[str]:
    """Split *text* into lines no wider than *max_width*.

    Words are packed greedily; explicit newlines force a break and blank
    lines are kept.  A single word wider than the line is broken across
    lines character by character.  Blank text yields no lines.
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")

    text = normalize_whitespace(text)
    if not text:
        return []

    lines: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split(" ") if paragraph else []
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
            while len(word) > 1 and measure(word) > max_width:
                head = _fit_prefix(word, max_width, measure)
                lines.append(head)
                word = word[len(head):]
            current = word

        if current:
            lines.append(current)

    return lines
