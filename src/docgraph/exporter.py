"""Snapshot writers: raw JSON dump and a human-readable index document."""

from __future__ import annotations

from collections import defaultdict
import logging
import os
from pathlib import Path
from typing import Dict, List

from docgraph.core.schemas import DocumentNode, GraphSnapshot

logger = logging.getLogger(__name__)


def export_json(snapshot: GraphSnapshot, path: Path) -> Path:
    """Write the snapshot verbatim as indented JSON."""
    path = Path(path)
    path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Wrote JSON export to %s", path)
    return path


def export_index(snapshot: GraphSnapshot, path: Path) -> Path:
    path = Path(path)
    path.write_text(render_index(snapshot), encoding="utf-8")
    logger.info("Wrote index export to %s", path)
    return path


def _link(node_path: str, root: str, label: str) -> str:
    relative = os.path.relpath(node_path, root).replace(os.sep, "/")
    return f"[{label}]({relative})"


def render_index(snapshot: GraphSnapshot) -> str:
    """Render the snapshot as a markdown index grouped by category.

    Links are relative to the snapshot root, so the document is meant to be
    written there.
    """
    root = snapshot.root
    lines: List[str] = [
        f"# {os.path.basename(root) or root} Index",
        "",
        "## Overview",
        "",
        f"{len(snapshot.nodes)} documents, {len(snapshot.edges)} links, "
        f"corpus health {snapshot.health_score}/100, "
        f"about {snapshot.total_token_estimate} tokens.",
        "",
    ]

    groups: Dict[str, List[DocumentNode]] = defaultdict(list)
    for node in snapshot.nodes:
        groups[node.category].append(node)

    for category in sorted(groups):
        lines.append(f"## {category}")
        lines.append("")
        for node in groups[category]:
            entry = f"- {_link(node.file_path, root, node.label)} ({node.health_score}/100)"
            if node.summary:
                entry += f": {node.summary}"
            lines.append(entry)
        lines.append("")

    if snapshot.broken_links:
        lines.append("## Broken Links")
        lines.append("")
        for broken in snapshot.broken_links:
            target = os.path.relpath(broken.target_path, root).replace(os.sep, "/")
            lines.append(
                f"- {_link(broken.source_file_path, root, broken.source_label)} "
                f"-> `{target}` ({broken.label})"
            )
        lines.append("")

    if snapshot.backlink_suggestions:
        lines.append("## Missing Backlinks")
        lines.append("")
        for suggestion in snapshot.backlink_suggestions:
            lines.append(
                f"- {suggestion.from_label} should link back to "
                f"{_link(suggestion.to_file_path, root, suggestion.to_label)}"
            )
        lines.append("")

    if snapshot.similarity_suggestions:
        lines.append("## Similar Documents")
        lines.append("")
        for suggestion in snapshot.similarity_suggestions:
            lines.append(
                f"- {suggestion.node_a_label} "
                f"<-> {suggestion.node_b_label} "
                f"({suggestion.score:.2f})"
            )
        lines.append("")

    return "\n".join(lines)
