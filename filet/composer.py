"""Pattern composer for filet crochet digit strings.

Turns a digit string into one combined grid.

Composition algorithm:
1. Drop every character that is not 0-9
2. Resolve a glyph per digit (custom set first, then built-ins)
3. Size every digit block to the largest glyph (smaller glyphs read
   as open-padded)
4. Scale rows and columns by the gauge factors
5. Lay the blocks out left to right with one open column (scaled)
   between neighbours

Composition is a pure function of the digits, the glyphs and the
gauge: the same inputs always give the same grid.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from .gauge import Gauge, compute_scale
from .glyphs import DIGITS, GlyphRegistry
from .grid import Cell, ComposedPattern, GlyphGrid

logger = structlog.get_logger(__name__)

# Open columns between neighbouring digits, before gauge scaling
DIGIT_SPACING = 1


class InvalidInput(ValueError):
    """Input that cannot produce a pattern (no digits, bad gauge)."""


def clean_digits(digits: str) -> str:
    """Keep only the characters 0-9, in order."""
    return "".join(ch for ch in digits if ch in DIGITS)


def validate_gauge(gauge: Gauge | None) -> None:
    """Reject gauges with non-positive densities.

    Raises:
        InvalidInput: If either density is <= 0.
    """
    if gauge is None:
        return
    if gauge.stitches_per_inch <= 0 or gauge.rows_per_inch <= 0:
        raise InvalidInput(
            "Gauge values must be positive, got "
            f"{gauge.stitches_per_inch} stitches and {gauge.rows_per_inch} rows per inch"
        )


def compose(
    digits: str,
    registry: GlyphRegistry,
    gauge: Gauge | None = None,
    glyph_set: Mapping[str, GlyphGrid] | None = None,
) -> ComposedPattern:
    """Compose a digit string into a single gauge-scaled grid.

    Args:
        digits: Digit string. Non-digit characters are ignored.
        registry: Glyph lookup with the built-in defaults.
        gauge: Crochet gauge, or None for the standard gauge.
        glyph_set: Custom glyphs keyed by digit, preferred over the
            built-ins where present.

    Returns:
        ComposedPattern with the combined grid and its dimensions.

    Raises:
        InvalidInput: If ``digits`` contains no digits at all.
    """
    clean = clean_digits(digits)
    if not clean:
        raise InvalidInput("No valid digits provided")

    glyphs = [registry.resolve(digit, glyph_set) for digit in clean]

    base_height = max(glyph.height for glyph in glyphs)
    base_digit_width = max(glyph.width for glyph in glyphs)

    scale = compute_scale(gauge)
    scaled_height = base_height * scale.scale_y
    scaled_digit_width = base_digit_width * scale.scale_x
    spacing_cols = DIGIT_SPACING * scale.scale_x
    spacer = (Cell.OPEN,) * spacing_cols

    rows: list[tuple[Cell, ...]] = []
    for r in range(scaled_height):
        source_row = r // scale.scale_y
        row: list[Cell] = []
        for index, glyph in enumerate(glyphs):
            if index > 0:
                row.extend(spacer)
            row.extend(
                glyph.cell_at(source_row, c // scale.scale_x) for c in range(scaled_digit_width)
            )
        rows.append(tuple(row))

    grid = GlyphGrid(cells=tuple(rows))
    total_width = len(glyphs) * scaled_digit_width + (len(glyphs) - 1) * spacing_cols

    logger.debug(
        "pattern_composed",
        digits=clean,
        scale_x=scale.scale_x,
        scale_y=scale.scale_y,
        width=total_width,
        height=scaled_height,
        custom_glyphs=sum(1 for d in clean if glyph_set is not None and d in glyph_set),
    )

    return ComposedPattern(
        grid=grid,
        total_width=total_width,
        total_height=scaled_height,
        source_digits=clean,
    )
