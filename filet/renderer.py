"""SVG rendering for filet crochet patterns.

Renders a GlyphGrid as one square per cell:
- Solid cells: black fill
- Open cells: white fill
- Every cell: thin light-gray outline, so the mesh reads as a chart

The SVG is self-contained and can be embedded as a base64 data URI
anywhere an image source is accepted.
"""

from __future__ import annotations

import base64

import structlog

from .grid import Cell, GlyphGrid

logger = structlog.get_logger(__name__)

DEFAULT_CELL_SIZE = 20

SVG_MIME_TYPE = "image/svg+xml"

CELL_FILLS = {
    Cell.SOLID: "#000000",
    Cell.OPEN: "#ffffff",
}
GRID_LINE_COLOR = "#cccccc"
GRID_LINE_WIDTH = 1


def render_svg(grid: GlyphGrid, cell_size: int = DEFAULT_CELL_SIZE) -> str:
    """Render a grid as an SVG string.

    Args:
        grid: Pattern grid.
        cell_size: Edge length of one cell in pixels.

    Returns:
        Complete SVG document as a string.

    Raises:
        ValueError: If cell_size is less than 1.
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be a positive integer, got {cell_size}")

    width = grid.width * cell_size
    height = grid.height * cell_size

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}">',
    ]

    for row_idx, row in enumerate(grid.cells):
        y = row_idx * cell_size
        for col_idx, cell in enumerate(row):
            svg_parts.append(
                f'  <rect x="{col_idx * cell_size}" y="{y}" '
                f'width="{cell_size}" height="{cell_size}" '
                f'fill="{CELL_FILLS[cell]}" '
                f'stroke="{GRID_LINE_COLOR}" stroke-width="{GRID_LINE_WIDTH}"/>'
            )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug(
        "svg_rendered",
        columns=grid.width,
        rows=grid.height,
        cell_size=cell_size,
        width=width,
        height=height,
    )

    return svg_content


def to_data_uri(svg: str) -> str:
    """Wrap an SVG document in a base64 data URI."""
    payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:{SVG_MIME_TYPE};base64,{payload}"


def render_data_uri(grid: GlyphGrid, cell_size: int = DEFAULT_CELL_SIZE) -> str:
    """Render a grid straight to an embeddable SVG data URI."""
    return to_data_uri(render_svg(grid, cell_size))
