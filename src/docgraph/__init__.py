"""docgraph: knowledge graph and link health analysis for markdown folders."""

from docgraph.core import (
    ConfigError,
    CorpusError,
    DocumentReadError,
    GraphSnapshot,
    ScanError,
    build_graph,
    reachability,
    shortest_path,
)

__version__ = "0.1.0"

__all__ = [
    "build_graph",
    "reachability",
    "shortest_path",
    "GraphSnapshot",
    "CorpusError",
    "ScanError",
    "DocumentReadError",
    "ConfigError",
]
