"""Keyword-overlap link suggestions.

Compares every unordered pair of documents that are not yet linked in either
direction. The pairwise pass is quadratic in corpus size.
"""

from dataclasses import dataclass
import logging
from typing import AbstractSet, Iterable, List, Sequence, Set, Tuple

from docgraph.core.schemas import DirectedEdge, SimilaritySuggestion
from docgraph.lib.numeric import round_to

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.15
DEFAULT_MAX_SUGGESTIONS = 20


@dataclass(frozen=True)
class KeywordProfile:
    id: str
    label: str
    keywords: Tuple[str, ...]


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def suggest_similar(
    profiles: Sequence[KeywordProfile],
    edges: Iterable[DirectedEdge],
    threshold: float = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_MAX_SUGGESTIONS,
) -> List[SimilaritySuggestion]:
    """Rank unconnected document pairs by keyword Jaccard similarity.

    Documents without keywords are never compared.

    Args:
        profiles: Documents in snapshot order.
        edges: Existing edges; linked pairs (either direction) are skipped.
        threshold: Minimum unrounded similarity to keep a pair.
        limit: Maximum number of suggestions returned.

    Returns:
        Suggestions sorted by descending score, ties in pair order.
    """
    connected: Set[Tuple[str, str]] = set()
    for edge in edges:
        connected.add((edge.source, edge.target))
        connected.add((edge.target, edge.source))

    keyword_sets = [set(p.keywords) for p in profiles]
    suggestions: List[SimilaritySuggestion] = []

    for i in range(len(profiles)):
        set_a = keyword_sets[i]
        if not set_a:
            continue
        for j in range(i + 1, len(profiles)):
            a, b = profiles[i], profiles[j]
            if (a.id, b.id) in connected:
                continue
            set_b = keyword_sets[j]
            if not set_b:
                continue
            similarity = jaccard(set_a, set_b)
            if similarity >= threshold:
                suggestions.append(SimilaritySuggestion(
                    node_a_id=a.id,
                    node_a_label=a.label,
                    node_b_id=b.id,
                    node_b_label=b.label,
                    score=round_to(similarity, 2),
                ))

    suggestions.sort(key=lambda s: s.score, reverse=True)
    logger.debug("%d similarity candidates above %.2f", len(suggestions), threshold)
    return suggestions[:limit]
