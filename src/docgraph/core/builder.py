"""Graph builder for markdown corpora.

Turns scanned documents and their extracted links into nodes, deduplicated
directed edges and raw link candidates for broken link detection.
"""

from dataclasses import dataclass, field
import logging
import os
from typing import Dict, List, Optional, Sequence, Set, Tuple

from docgraph.core.content import extract_category, extract_summary, extract_title
from docgraph.core.links import LinkExtractor
from docgraph.core.scanner import SourceDocument
from docgraph.core.schemas import DirectedEdge, RawLinkCandidate

logger = logging.getLogger(__name__)


@dataclass
class NodeRecord:
    """Working state for one document while the graph is assembled."""
    id: str
    label: str
    summary: str
    category: str
    file_path: str
    relative_path: str
    text: str
    in_degree: int = 0
    out_degree: int = 0


@dataclass
class BuildResult:
    """Nodes, edges and raw links produced by `GraphBuilder.build`."""
    nodes: List[NodeRecord] = field(default_factory=list)
    edges: List[DirectedEdge] = field(default_factory=list)
    raw_links: List[RawLinkCandidate] = field(default_factory=list)

    def node_map(self) -> Dict[str, NodeRecord]:
        return {node.id: node for node in self.nodes}


def canonical_id(path: str) -> str:
    return os.path.abspath(str(path))


class GraphBuilder:
    """Build the directed document graph.

    Three passes: create every node, add edges per document under the
    first-seen-wins rule, then count degrees from the final edge list.
    """

    def __init__(
        self,
        extractor: Optional[LinkExtractor] = None,
        summary_max_chars: int = 200,
    ):
        self.extractor = extractor or LinkExtractor()
        self.summary_max_chars = summary_max_chars

    def build(self, root: str, documents: Sequence[SourceDocument]) -> BuildResult:
        root = canonical_id(root)
        result = BuildResult()

        # First pass: nodes
        nodes: Dict[str, NodeRecord] = {}
        for document in documents:
            node = self._make_node(root, document)
            nodes[node.id] = node
        result.nodes = list(nodes.values())

        # Second pass: edges
        seen: Set[Tuple[str, str]] = set()
        for node in result.nodes:
            base_dir = os.path.dirname(node.file_path)
            for link in self.extractor.extract(node.text, base_dir):
                target_id = canonical_id(link.target)
                if target_id == node.id:
                    continue
                if target_id in nodes:
                    key = (node.id, target_id)
                    if key not in seen:
                        seen.add(key)
                        result.edges.append(DirectedEdge(
                            source=node.id,
                            target=target_id,
                            label=link.label,
                            kind=link.kind,
                        ))
                result.raw_links.append(RawLinkCandidate(
                    source_id=node.id,
                    source_label=node.label,
                    source_file_path=node.file_path,
                    resolved_path=target_id,
                    label=link.label,
                    kind=link.kind,
                    exists_on_disk=os.path.exists(target_id),
                ))

        # Third pass: degrees
        for edge in result.edges:
            nodes[edge.source].out_degree += 1
            nodes[edge.target].in_degree += 1

        logger.info(
            "Built graph: %d nodes, %d edges, %d link occurrences",
            len(result.nodes), len(result.edges), len(result.raw_links),
        )
        return result

    def _make_node(self, root: str, document: SourceDocument) -> NodeRecord:
        file_path = canonical_id(document.path)
        stem = os.path.basename(file_path)
        if stem.endswith(".md"):
            stem = stem[: -len(".md")]
        return NodeRecord(
            id=file_path,
            label=extract_title(document.text) or stem,
            summary=extract_summary(document.text, self.summary_max_chars),
            category=extract_category(root, file_path),
            file_path=file_path,
            relative_path=os.path.relpath(file_path, root),
            text=document.text,
        )
