"""Digit glyphs for filet crochet patterns.

Each digit 0-9 has a built-in 5x7 glyph drawn with solid blocks and
open mesh. Users can supply their own glyphs per digit; the registry
falls back to the built-in set for anything a custom set lacks, so
lookups never fail.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Protocol

from .grid import GlyphGrid

DIGITS = "0123456789"

# Glyph used for anything that is not a recognized digit
FALLBACK_DIGIT = "0"

# Built-in glyph size
DEFAULT_GLYPH_WIDTH = 5
DEFAULT_GLYPH_HEIGHT = 7

# Largest custom glyph accepted through the API, in cells per side
MAX_GLYPH_CELLS = 15

_DEFAULT_GLYPH_ROWS: dict[str, list[str]] = {
    "0": [
        "█████",
        "█░░░█",
        "█░░░█",
        "█░░░█",
        "█░░░█",
        "█░░░█",
        "█████",
    ],
    "1": [
        "░░█░░",
        "░██░░",
        "░░█░░",
        "░░█░░",
        "░░█░░",
        "░░█░░",
        "█████",
    ],
    "2": [
        "█████",
        "░░░░█",
        "░░░░█",
        "█████",
        "█░░░░",
        "█░░░░",
        "█████",
    ],
    "3": [
        "█████",
        "░░░░█",
        "░░░░█",
        "█████",
        "░░░░█",
        "░░░░█",
        "█████",
    ],
    "4": [
        "█░░░█",
        "█░░░█",
        "█░░░█",
        "█████",
        "░░░░█",
        "░░░░█",
        "░░░░█",
    ],
    "5": [
        "█████",
        "█░░░░",
        "█░░░░",
        "█████",
        "░░░░█",
        "░░░░█",
        "█████",
    ],
    "6": [
        "█████",
        "█░░░░",
        "█░░░░",
        "█████",
        "█░░░█",
        "█░░░█",
        "█████",
    ],
    "7": [
        "█████",
        "░░░░█",
        "░░░░█",
        "░░░█░",
        "░░█░░",
        "░█░░░",
        "█░░░░",
    ],
    "8": [
        "█████",
        "█░░░█",
        "█░░░█",
        "█████",
        "█░░░█",
        "█░░░█",
        "█████",
    ],
    "9": [
        "█████",
        "█░░░█",
        "█░░░█",
        "█████",
        "░░░░█",
        "░░░░█",
        "█████",
    ],
}

# Canonical default glyph table, shared by the registry and the store seed
DEFAULT_GLYPHS: Mapping[str, GlyphGrid] = MappingProxyType(
    {digit: GlyphGrid.from_rows(rows) for digit, rows in _DEFAULT_GLYPH_ROWS.items()}
)


class GlyphEntry(Protocol):
    """Anything carrying a digit and its glyph, e.g. a stored digit pattern."""

    digit: str
    grid: GlyphGrid


def glyph_set_from_entries(entries: Iterable[GlyphEntry]) -> dict[str, GlyphGrid]:
    """Build a digit -> grid lookup, keeping the first entry for each digit."""
    glyph_set: dict[str, GlyphGrid] = {}
    for entry in entries:
        glyph_set.setdefault(entry.digit, entry.grid)
    return glyph_set


class GlyphRegistry:
    """Digit -> glyph lookup over an immutable default table.

    Args:
        defaults: Built-in glyphs keyed by digit. Must contain
            FALLBACK_DIGIT.
    """

    def __init__(self, defaults: Mapping[str, GlyphGrid] = DEFAULT_GLYPHS) -> None:
        if FALLBACK_DIGIT not in defaults:
            raise ValueError(f"Default glyphs must include '{FALLBACK_DIGIT}'")
        self._defaults = MappingProxyType(dict(defaults))

    @property
    def defaults(self) -> Mapping[str, GlyphGrid]:
        return self._defaults

    def resolve(
        self,
        digit: str,
        glyph_set: Mapping[str, GlyphGrid] | None = None,
    ) -> GlyphGrid:
        """Return the glyph to draw for ``digit``.

        Lookup order: ``glyph_set`` (when given), then the built-in
        glyph for the digit, then the built-in glyph for
        FALLBACK_DIGIT. Never raises.
        """
        if glyph_set is not None and digit in glyph_set:
            return glyph_set[digit]
        if digit in self._defaults:
            return self._defaults[digit]
        return self._defaults[FALLBACK_DIGIT]
