"""End-to-end analysis: scan a folder and return a complete graph snapshot.

Every call recomputes everything from the files currently on disk and returns
a new frozen `GraphSnapshot`; no state is shared between runs. Callers that
re-run analysis on file changes must serialize their own calls.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Dict, List

from docgraph.core.builder import GraphBuilder
from docgraph.core.content import analyze_content
from docgraph.core.health import aggregate, node_warnings, score_node
from docgraph.core.identity import DocgraphConfig, load_docgraph_config
from docgraph.core.links import LinkExtractor
from docgraph.core.scanner import read_documents, scan_corpus
from docgraph.core.schemas import ContentMetrics, DocumentNode, GraphSnapshot
from docgraph.core.similarity import KeywordProfile, suggest_similar
from docgraph.core.validator import (
    bidirectional_ratios,
    count_broken_outgoing,
    find_broken_links,
    find_missing_backlinks,
)

logger = logging.getLogger(__name__)


def build_graph(root: Path | str, config: DocgraphConfig | None = None) -> GraphSnapshot:
    """Analyze every markdown file under `root`.

    Args:
        root: Folder to scan.
        config: Analysis configuration. Defaults to ``docgraph.toml`` in
            `root` when present, else built-in defaults.

    Returns:
        A complete snapshot. An empty corpus gives an empty snapshot.

    Raises:
        ScanError: If the folder tree cannot be enumerated.
        DocumentReadError: If a markdown file cannot be read.
        ConfigError: If ``docgraph.toml`` is present but invalid.
    """
    start_time = time.time()
    root_path = os.path.abspath(root)
    if config is None:
        config = load_docgraph_config(Path(root_path))

    paths = scan_corpus(root_path, config.scan.skip_dirs)
    documents = read_documents(paths)

    builder = GraphBuilder(
        extractor=LinkExtractor(config.links.sections),
        summary_max_chars=config.content.summary_max_chars,
    )
    built = builder.build(root_path, documents)

    metrics: Dict[str, ContentMetrics] = {
        record.id: analyze_content(record.text, config.content.max_keywords)
        for record in built.nodes
    }

    node_map = built.node_map()
    broken_links = find_broken_links(built.raw_links, node_map)
    broken_counts = count_broken_outgoing(broken_links)
    backlinks = find_missing_backlinks(
        built.edges,
        labels={r.id: r.label for r in built.nodes},
        file_paths={r.id: r.file_path for r in built.nodes},
    )
    ratios = bidirectional_ratios(node_map, built.edges)

    nodes: List[DocumentNode] = []
    for record in built.nodes:
        content = metrics[record.id]
        flags = dict(
            has_title=content.has_title,
            has_overview_section=content.has_overview_section,
            has_related_section=content.has_related_section,
            word_count=content.word_count,
            in_degree=record.in_degree,
            out_degree=record.out_degree,
        )
        broken = broken_counts.get(record.id, 0)
        breakdown = score_node(
            **flags,
            broken_outgoing_count=broken,
            bidirectional_ratio=ratios[record.id],
        )
        nodes.append(DocumentNode(
            id=record.id,
            label=record.label,
            summary=record.summary,
            category=record.category,
            file_path=record.file_path,
            relative_path=record.relative_path,
            token_estimate=content.token_estimate,
            keywords=content.keywords,
            broken_outgoing_count=broken,
            bidirectional_ratio=ratios[record.id],
            health_score=breakdown.total,
            health_breakdown=breakdown,
            warnings=tuple(node_warnings(**flags)),
            **flags,
        ))

    health_score, health_breakdown = aggregate([n.health_breakdown for n in nodes])
    similar = suggest_similar(
        [KeywordProfile(id=n.id, label=n.label, keywords=n.keywords) for n in nodes],
        built.edges,
        threshold=config.similarity.threshold,
        limit=config.similarity.max_suggestions,
    )

    snapshot = GraphSnapshot(
        root=root_path,
        nodes=tuple(nodes),
        edges=tuple(built.edges),
        broken_links=tuple(broken_links),
        backlink_suggestions=tuple(backlinks),
        similarity_suggestions=tuple(similar),
        health_score=health_score,
        health_breakdown=health_breakdown,
        total_token_estimate=sum(n.token_estimate for n in nodes),
    )

    duration_ms = int((time.time() - start_time) * 1000)
    logger.info(
        "Analyzed %s in %dms: %d nodes, %d edges, %d broken links, health %d",
        root_path, duration_ms, len(nodes), len(built.edges), len(broken_links), health_score,
    )
    return snapshot
