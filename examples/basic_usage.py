#!/usr/bin/env python3
"""Basic usage example for filet.

Demonstrates composing digit strings into filet crochet charts,
scaling them to a gauge, swapping in a custom glyph, and searching
the stored pattern images.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from filet.composer import InvalidInput, compose
from filet.gauge import Gauge, compute_scale
from filet.glyphs import GlyphRegistry
from filet.grid import GlyphGrid
from filet.renderer import render_data_uri
from filet.store import PatternStore


def example_basic_compose():
    """Compose a digit string with the built-in glyphs."""
    print("=" * 60)
    print("Example 1: Basic Composition")
    print("=" * 60)

    registry = GlyphRegistry()
    pattern = compose("2024", registry)
    print(f"  Digits:      {pattern.source_digits}")
    print(f"  Size:        {pattern.total_width} x {pattern.total_height} cells")
    print()
    for line in pattern.grid.to_text().splitlines():
        print(f"    {line}")
    print()

    uri = render_data_uri(pattern.grid)
    print(f"  Data URI:    {uri[:48]}... ({len(uri)} chars)")
    print()


def example_gauge():
    """Scale a pattern for a tighter crochet gauge."""
    print("=" * 60)
    print("Example 2: Gauge Scaling")
    print("=" * 60)

    registry = GlyphRegistry()
    for gauge in [None, Gauge(4, 4), Gauge(8, 4), Gauge(8, 8), Gauge(10, 6)]:
        scale = compute_scale(gauge)
        pattern = compose("19", registry, gauge)
        label = "none" if gauge is None else f"{gauge.stitches_per_inch}x{gauge.rows_per_inch}"
        print(
            f"  Gauge {label:>8}: scale {scale.scale_x}x{scale.scale_y}, "
            f"{pattern.total_width} x {pattern.total_height} cells"
        )
    print()


def example_custom_glyph():
    """Replace one digit with a custom glyph; the rest fall back."""
    print("=" * 60)
    print("Example 3: Custom Glyphs")
    print("=" * 60)

    heart = GlyphGrid.from_rows(
        [
            "░█░█░",
            "█████",
            "█████",
            "░███░",
            "░░█░░",
        ]
    )
    pattern = compose("101", GlyphRegistry(), glyph_set={"0": heart})
    for line in pattern.grid.to_text().splitlines():
        print(f"    {line}")
    print()


def example_store_and_search():
    """Generate patterns through the store and search them."""
    print("=" * 60)
    print("Example 4: Store and Search")
    print("=" * 60)

    store = PatternStore()
    image, _ = store.generate_pattern("(555) 0199", gauge=Gauge(8, 8))
    print(f"  Stored image {image.id}: {image.alt_text}")
    print(f"  Tags:        {', '.join(image.tags)}")

    for query in ["555", "digit7", "crochet pattern", ""]:
        results = store.search_images(query)
        print(f"  Search {query!r:>18}: {[r.id for r in results]}")

    try:
        store.generate_pattern("no digits here")
    except InvalidInput as e:
        print(f"  Rejected:    {e}")
    print()


if __name__ == "__main__":
    example_basic_compose()
    example_gauge()
    example_custom_glyph()
    example_store_and_search()
