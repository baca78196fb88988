"""Read-only queries over a finished graph snapshot.

Both traversals follow outgoing edges only and never modify the snapshot, so
they can be called repeatedly by whichever layer holds the UI state.
"""

from typing import Dict, Iterable, List, Optional

import networkx as nx

from docgraph.core.schemas import DirectedEdge, GraphSnapshot


def link_graph(node_ids: Iterable[str], edges: Iterable[DirectedEdge]) -> nx.DiGraph:
    """Build a networkx DiGraph with one node per document and one edge per link."""
    graph = nx.DiGraph()
    graph.add_nodes_from(node_ids)
    for edge in edges:
        graph.add_edge(edge.source, edge.target, label=edge.label, kind=edge.kind.value)
    return graph


def snapshot_graph(snapshot: GraphSnapshot) -> nx.DiGraph:
    return link_graph((node.id for node in snapshot.nodes), snapshot.edges)


def reachability(snapshot: GraphSnapshot, entry_id: str) -> Dict[str, int]:
    """Hop distance from `entry_id` to every node reachable from it.

    Unreached nodes are absent from the result. An unknown entry id yields an
    empty mapping.
    """
    graph = snapshot_graph(snapshot)
    if entry_id not in graph:
        return {}
    return dict(nx.single_source_shortest_path_length(graph, entry_id))


def shortest_path(
    snapshot: GraphSnapshot, source_id: str, target_id: str
) -> Optional[List[str]]:
    """Fewest-hop path from source to target, both ends included.

    Returns:
        Ordered node ids, ``[source_id]`` when source and target are the same
        node, or None when the target is unreachable or either id is unknown.
    """
    graph = snapshot_graph(snapshot)
    try:
        return nx.shortest_path(graph, source_id, target_id)
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return None
