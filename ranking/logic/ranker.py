"""
Ranker

Orders scored candidates by a chosen key and slices out one page.
Ties break on candidate id (ascending) so repeated runs are stable.
"""

import math
from datetime import datetime
from typing import List

from .contracts import ScoredCandidate, Page

COMPOSITE_KEY = "composite"
CREATED_AT_KEY = "createdAt"


def sort_value(scored: ScoredCandidate, key: str) -> float:
    # Batch rankings carry the unrounded composite in sort_values
    if key in scored.sort_values:
        return scored.sort_values[key]
    if key == COMPOSITE_KEY:
        return scored.composite_score
    return 0.0


def rank_candidates(
    scored_candidates: List[ScoredCandidate],
    key: str = COMPOSITE_KEY,
    descending: bool = True
) -> List[ScoredCandidate]:
    """
    Rank candidates by one sort key.

    Args:
        scored_candidates: Scored candidates to order
        key: "composite" or any key present in `sort_values`
        descending: Highest first (default)

    Returns:
        New sorted list; the input is not modified
    """
    if descending:
        return sorted(scored_candidates, key=lambda s: (-sort_value(s, key), s.id))
    return sorted(scored_candidates, key=lambda s: (sort_value(s, key), s.id))


def rank_by_created_at(scored_candidates: List[ScoredCandidate]) -> List[ScoredCandidate]:
    """Oldest first; candidates without a timestamp go last."""
    return sorted(
        scored_candidates,
        key=lambda s: (s.candidate.created_at is None, s.candidate.created_at or datetime.min, s.id)
    )


def paginate(items: List[ScoredCandidate], page: int, limit: int) -> Page:
    """
    Slice one page out of a ranked list.

    A page past the end returns no items but the true totals.
    """
    total = len(items)
    total_pages = math.ceil(total / limit) if limit else 0
    offset = (page - 1) * limit

    return Page(
        items=items[offset:offset + limit],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_previous=page > 1,
    )
