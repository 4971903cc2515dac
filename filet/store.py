"""In-memory store for digit glyphs and pattern images.

Holds two keyed tables:
- digit patterns: per-digit glyphs, split into the default set
  (``is_default=True``) and the custom set
- images: searchable TaggedItem records, including every pattern
  generated through ``generate_pattern``

Identities come from injected id factories, one per table, so callers
decide between sequential keys, UUID-derived keys or keys handed out
by an external database. Writes are serialized with a lock; reads
return snapshots.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import structlog

from .composer import compose, validate_gauge
from .gauge import Gauge
from .glyphs import GlyphRegistry, glyph_set_from_entries
from .grid import ComposedPattern, GlyphGrid
from .renderer import DEFAULT_CELL_SIZE, render_data_uri
from .scoring import DEFAULT_LIMIT, TaggedItem, search

logger = structlog.get_logger(__name__)

SAMPLE_TAGS = ("filet", "crochet", "pattern")


def sequential_ids(start: int = 1) -> Callable[[], int]:
    """Return an id factory counting up from ``start``."""
    return itertools.count(start).__next__


@dataclass(frozen=True)
class DigitPattern:
    """A stored glyph for one digit.

    Attributes:
        id: Identity assigned by the store.
        name: Display name.
        digit: The digit this glyph draws ('0'-'9').
        grid: The glyph itself.
        width: Declared column count.
        height: Declared row count.
        description: Optional free text.
        is_default: True for the default set, False for the custom set.
    """

    id: int
    name: str
    digit: str
    grid: GlyphGrid
    width: int
    height: int
    description: str | None = None
    is_default: bool = False


class PatternStore:
    """Keyed in-memory store for digit patterns and images.

    Args:
        registry: Glyph registry used for composition and seeding.
        pattern_ids: Id factory for digit patterns.
        image_ids: Id factory for images.
        seed: Populate the default digit set and one sample image per digit.
    """

    def __init__(
        self,
        registry: GlyphRegistry | None = None,
        pattern_ids: Callable[[], int] | None = None,
        image_ids: Callable[[], int] | None = None,
        seed: bool = True,
    ) -> None:
        self.registry = registry or GlyphRegistry()
        self._pattern_ids = pattern_ids or sequential_ids()
        self._image_ids = image_ids or sequential_ids()
        self._digit_patterns: dict[int, DigitPattern] = {}
        self._images: dict[int, TaggedItem] = {}
        self._lock = threading.Lock()

        if seed:
            self._seed_default_patterns()
            self._seed_sample_images()

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def _seed_default_patterns(self) -> None:
        for digit, grid in self.registry.defaults.items():
            self.create_digit_pattern(
                name=f"Default {digit}",
                description=f"Default filet crochet pattern for digit {digit}",
                digit=digit,
                grid=grid,
                is_default=True,
            )

    def _seed_sample_images(self) -> None:
        for digit, grid in self.registry.defaults.items():
            self.create_image(
                url=render_data_uri(grid),
                alt_text=f"Filet crochet pattern for digit {digit}",
                tags=[digit, f"digit{digit}", *SAMPLE_TAGS],
            )

    # ------------------------------------------------------------------
    # Digit patterns
    # ------------------------------------------------------------------

    def create_digit_pattern(
        self,
        name: str,
        digit: str,
        grid: GlyphGrid,
        width: int | None = None,
        height: int | None = None,
        description: str | None = None,
        is_default: bool = False,
    ) -> DigitPattern:
        """Store a glyph for ``digit`` and return the new entry.

        Declared ``width``/``height`` default to the grid's own size.
        """
        with self._lock:
            pattern = DigitPattern(
                id=self._pattern_ids(),
                name=name,
                digit=digit,
                grid=grid,
                width=width if width is not None else grid.width,
                height=height if height is not None else grid.height,
                description=description,
                is_default=is_default,
            )
            self._digit_patterns[pattern.id] = pattern

        logger.info(
            "digit_pattern_created",
            pattern_id=pattern.id,
            digit=digit,
            is_default=is_default,
        )
        return pattern

    def get_digit_pattern(self, pattern_id: int) -> DigitPattern | None:
        return self._digit_patterns.get(pattern_id)

    def list_digit_patterns(self) -> list[DigitPattern]:
        return list(self._digit_patterns.values())

    def list_digit_patterns_by_set(self, is_default: bool) -> list[DigitPattern]:
        return [p for p in self._digit_patterns.values() if p.is_default == is_default]

    def delete_digit_pattern(self, pattern_id: int) -> bool:
        """Delete a digit pattern. Returns False if it did not exist."""
        with self._lock:
            removed = self._digit_patterns.pop(pattern_id, None)

        if removed is None:
            logger.info("digit_pattern_not_found", pattern_id=pattern_id)
            return False
        logger.info("digit_pattern_deleted", pattern_id=pattern_id, digit=removed.digit)
        return True

    def glyph_set(self, is_default: bool) -> Mapping[str, GlyphGrid]:
        """Glyph lookup for one set; the earliest entry per digit wins."""
        return glyph_set_from_entries(self.list_digit_patterns_by_set(is_default))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def create_image(self, url: str, alt_text: str, tags: Iterable[str]) -> TaggedItem:
        with self._lock:
            image = TaggedItem(
                id=self._image_ids(),
                url=url,
                alt_text=alt_text,
                tags=tuple(dict.fromkeys(tags)),
            )
            self._images[image.id] = image
        return image

    def get_image(self, image_id: int) -> TaggedItem | None:
        return self._images.get(image_id)

    def list_images(self) -> list[TaggedItem]:
        return list(self._images.values())

    def search_images(self, query: str, limit: int = DEFAULT_LIMIT) -> list[TaggedItem]:
        results = search(self.list_images(), query, limit)
        logger.debug("images_searched", query=query, results=len(results))
        return results

    # ------------------------------------------------------------------
    # Pattern generation
    # ------------------------------------------------------------------

    def generate_pattern(
        self,
        digits: str,
        pattern_set_id: int | None = None,
        gauge: Gauge | None = None,
        cell_size: int | None = None,
    ) -> tuple[TaggedItem, ComposedPattern]:
        """Compose, render and store a pattern for a digit string.

        Any ``pattern_set_id`` selects the custom set; without one the
        default set is used. Digits missing from the chosen set use the
        built-in glyphs.

        Args:
            digits: Digit string. Non-digit characters are ignored.
            pattern_set_id: Custom pattern set reference, or None.
            gauge: Crochet gauge, or None for the standard gauge.
            cell_size: Rendered cell size in pixels.

        Returns:
            The stored image record and the composed pattern.

        Raises:
            InvalidInput: If there are no digits or the gauge is not positive.
        """
        validate_gauge(gauge)
        glyph_set = self.glyph_set(is_default=pattern_set_id is None)
        pattern = compose(digits, self.registry, gauge, glyph_set)
        url = render_data_uri(pattern.grid, cell_size or DEFAULT_CELL_SIZE)
        image = self.create_image(url=url, alt_text=pattern.alt_text, tags=pattern.tags)

        logger.info(
            "pattern_generated",
            image_id=image.id,
            digits=pattern.source_digits,
            custom_set=pattern_set_id is not None,
            width=pattern.total_width,
            height=pattern.total_height,
        )
        return image, pattern

