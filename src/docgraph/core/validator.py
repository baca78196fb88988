"""Link health checks: broken links, missing backlinks, bidirectional ratio."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from docgraph.core.schemas import (
    BacklinkSuggestion,
    BrokenLink,
    DirectedEdge,
    RawLinkCandidate,
)
from docgraph.core.traversal import link_graph


def find_broken_links(
    raw_links: Iterable[RawLinkCandidate], node_ids: Set[str] | Mapping[str, object]
) -> List[BrokenLink]:
    """Report links whose target is neither on disk nor a known node.

    One entry per distinct (source, target) pair, in first-seen order.
    """
    broken: List[BrokenLink] = []
    seen: Set[Tuple[str, str]] = set()
    for link in raw_links:
        if link.exists_on_disk or link.resolved_path in node_ids:
            continue
        key = (link.source_id, link.resolved_path)
        if key in seen:
            continue
        seen.add(key)
        broken.append(BrokenLink(
            source_id=link.source_id,
            source_label=link.source_label,
            source_file_path=link.source_file_path,
            target_path=link.resolved_path,
            label=link.label,
        ))
    return broken


def count_broken_outgoing(broken_links: Iterable[BrokenLink]) -> Dict[str, int]:
    counts: Dict[str, int] = defaultdict(int)
    for link in broken_links:
        counts[link.source_id] += 1
    return dict(counts)


def find_missing_backlinks(
    edges: Sequence[DirectedEdge],
    labels: Mapping[str, str],
    file_paths: Mapping[str, str],
) -> List[BacklinkSuggestion]:
    """Suggest B -> A for every edge A -> B that is not reciprocated.

    Args:
        edges: Final edge list.
        labels: Node id -> display label.
        file_paths: Node id -> file path, used for the suggestion's target.
    """
    edge_set = {(edge.source, edge.target) for edge in edges}
    suggestions: List[BacklinkSuggestion] = []
    seen: Set[Tuple[str, str]] = set()
    for edge in edges:
        if (edge.target, edge.source) in edge_set:
            continue
        key = (edge.target, edge.source)
        if key in seen:
            continue
        if edge.target not in labels or edge.source not in labels:
            continue
        seen.add(key)
        suggestions.append(BacklinkSuggestion(
            from_id=edge.target,
            from_label=labels[edge.target],
            to_id=edge.source,
            to_label=labels[edge.source],
            to_file_path=file_paths.get(edge.source, edge.source),
        ))
    return suggestions


def bidirectional_ratios(
    node_ids: Iterable[str], edges: Sequence[DirectedEdge]
) -> Dict[str, float]:
    """Fraction of each node's neighbors that are linked in both directions."""
    graph = link_graph(node_ids, edges)
    ratios: Dict[str, float] = {}
    for node_id in graph.nodes:
        out_set = set(graph.successors(node_id))
        in_set = set(graph.predecessors(node_id))
        neighbors = out_set | in_set
        if not neighbors:
            ratios[node_id] = 0.0
            continue
        ratios[node_id] = len(out_set & in_set) / len(neighbors)
    return ratios
