"""
Fuzzy matching of grocery item names.
"""

from typing import List, Sequence

from rapidfuzz import fuzz, process, utils

MAX_SIMILAR_ITEMS = 5
FUZZY_SCORE_CUTOFF = 70


def rank_similar_names(
    query: str,
    names: Sequence[str],
    limit: int = MAX_SIMILAR_ITEMS,
    score_cutoff: float = FUZZY_SCORE_CUTOFF,
) -> List[str]:
    """
    Rank names by similarity to the query.

    Names containing the query (case-insensitive) come first, followed by
    fuzzy matches scoring at least ``score_cutoff``. At most ``limit`` names
    are returned.

    Args:
        query: Name typed by the user
        names: Candidate names
        limit: Maximum number of names to return
        score_cutoff: Minimum fuzzy score (0-100)

    Returns:
        Matching names, best match first
    """
    needle = query.strip().lower()
    if not needle or not names:
        return []

    scores = {
        choice: score
        for choice, score, _ in process.extract(
            query,
            names,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=None,
        )
    }

    ranked = sorted(
        (
            name for name in names
            if needle in name.lower() or scores.get(name, 0) >= score_cutoff
        ),
        key=lambda name: (needle not in name.lower(), -scores.get(name, 0), name.lower()),
    )
    return ranked[:limit]
