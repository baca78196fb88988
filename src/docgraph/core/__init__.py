"""Graph construction and analysis engine for markdown corpora."""

from .identity import ConfigError, DocgraphConfig, SectionPattern, load_docgraph_config
from .pipeline import build_graph
from .scanner import CorpusError, DocumentReadError, ScanError
from .schemas import (
    BacklinkSuggestion,
    BrokenLink,
    DirectedEdge,
    DocumentNode,
    GraphSnapshot,
    HealthBreakdown,
    LinkKind,
    SimilaritySuggestion,
    ValidationWarning,
    WarningType,
)
from .traversal import reachability, shortest_path

__all__ = [
    "build_graph",
    "reachability",
    "shortest_path",
    "GraphSnapshot",
    "DocumentNode",
    "DirectedEdge",
    "BrokenLink",
    "BacklinkSuggestion",
    "SimilaritySuggestion",
    "HealthBreakdown",
    "ValidationWarning",
    "WarningType",
    "LinkKind",
    "DocgraphConfig",
    "SectionPattern",
    "load_docgraph_config",
    "CorpusError",
    "ScanError",
    "DocumentReadError",
    "ConfigError",
]
