"""Gauge scaling for filet patterns.

A pattern drawn at the standard gauge of 4 stitches and 4 rows per
inch is used as-is. Tighter gauges repeat each cell horizontally
and/or vertically so the finished piece keeps roughly the same
physical size. Scale factors are whole numbers and never drop below
1, so a pattern is never shrunk below its native resolution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

STANDARD_STITCHES_PER_INCH = 4
STANDARD_ROWS_PER_INCH = 4


@dataclass(frozen=True)
class Gauge:
    """Crochet gauge.

    Attributes:
        stitches_per_inch: Horizontal stitch density.
        rows_per_inch: Vertical row density.
    """

    stitches_per_inch: float
    rows_per_inch: float


@dataclass(frozen=True)
class ScaleFactors:
    """Integer repeat counts applied to every source cell."""

    scale_x: int = 1
    scale_y: int = 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def _scale_for(density: float, standard: int) -> int:
    return max(1, round_half_up(density / standard))


def compute_scale(gauge: Gauge | None = None) -> ScaleFactors:
    """Compute horizontal and vertical scale factors for a gauge.

    Args:
        gauge: Crochet gauge, or None for the standard gauge.

    Returns:
        ScaleFactors with both factors >= 1.
    """
    if gauge is None:
        return ScaleFactors()
    return ScaleFactors(
        scale_x=_scale_for(gauge.stitches_per_inch, STANDARD_STITCHES_PER_INCH),
        scale_y=_scale_for(gauge.rows_per_inch, STANDARD_ROWS_PER_INCH),
    )
