"""Filet -- digit strings as filet crochet chart patterns.

Composes per-digit glyphs into a single solid/open cell grid, scales
it to a crochet gauge, and renders the result as a self-contained SVG
data URI. Also ranks stored pattern images against free-text queries
by tag and alt-text relevance.
"""
