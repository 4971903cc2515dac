"""Tag and alt-text relevance scoring for image search.

Each query token earns points from the first rule it satisfies:

    exact tag match ........ 10
    tag substring ........... 5
    alt text substring ...... 3
    tags + alt text ......... 1

Token scores are summed per item. Items scoring 0 are dropped and the
rest are ranked highest first, keeping the original order on ties.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

EXACT_TAG_SCORE = 10
PARTIAL_TAG_SCORE = 5
ALT_TEXT_SCORE = 3
ANY_TEXT_SCORE = 1

DEFAULT_LIMIT = 8


@dataclass(frozen=True)
class TaggedItem:
    """A searchable image record.

    Attributes:
        id: Identity assigned by the store.
        url: Image source, usually an SVG data URI.
        alt_text: Human-readable description.
        tags: Ordered, de-duplicated tags.
    """

    id: int
    url: str
    alt_text: str
    tags: tuple[str, ...] = field(default_factory=tuple)


def tokenize(query: str) -> list[str]:
    """Lower-case the query and split it on whitespace."""
    return query.lower().split()


def score_item(item: TaggedItem, tokens: Sequence[str]) -> int:
    """Sum the per-token scores for one item."""
    tags = [tag.lower() for tag in item.tags]
    alt = item.alt_text.lower()
    all_text = " ".join([*tags, alt])

    score = 0
    for token in tokens:
        if any(tag == token for tag in tags):
            score += EXACT_TAG_SCORE
        elif any(token in tag for tag in tags):
            score += PARTIAL_TAG_SCORE
        elif token in alt:
            score += ALT_TEXT_SCORE
        elif token in all_text:
            score += ANY_TEXT_SCORE
    return score


def search(
    items: Sequence[TaggedItem],
    query: str,
    limit: int = DEFAULT_LIMIT,
) -> list[TaggedItem]:
    """Rank items against a free-text query.

    Args:
        items: Candidate items, in their natural order.
        query: Free-text query. A blank query returns the first
            ``limit`` items unscored.
        limit: Maximum number of results.

    Returns:
        Matching items, best first.

    Raises:
        ValueError: If limit is less than 1.
    """
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")

    tokens = tokenize(query)
    if not tokens:
        return list(items[:limit])

    scored = [(score_item(item, tokens), item) for item in items]
    ranked = sorted(
        (pair for pair in scored if pair[0] > 0),
        key=lambda pair: pair[0],
        reverse=True,
    )
    return [item for _score, item in ranked[:limit]]
