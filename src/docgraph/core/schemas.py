"""
Pydantic schemas for the docgraph analysis snapshot.

Every model here is frozen: a snapshot is assembled once at the end of an
analysis run and handed to consumers (CLI, exporters) as read-only data.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# Enums

class LinkKind(str, Enum):
    """Where in a document a link was found."""
    STRUCTURAL = "structural"
    INLINE = "inline"


class WarningType(str, Enum):
    """Validation warnings attached to a document node."""
    MISSING_H1 = "missing-h1"
    MISSING_OVERVIEW = "missing-overview"
    NO_OUTGOING_LINKS = "no-outgoing-links"
    NO_RELATED_SECTION = "no-related-section"
    TOO_SHORT = "too-short"
    ORPHAN = "orphan"


# Value Objects

class ValidationWarning(BaseModel):
    """A single validation finding for a document."""

    model_config = ConfigDict(frozen=True)

    type: WarningType = Field(..., description="Warning category")
    message: str = Field(..., description="Human-readable explanation")


class HealthBreakdown(BaseModel):
    """Additive health score components (sum is at most 100)."""

    model_config = ConfigDict(frozen=True)

    has_title: int = Field(0, ge=0, le=10, description="Top-level heading present")
    has_overview: int = Field(0, ge=0, le=15, description="Overview section present")
    has_outgoing_links: int = Field(0, ge=0, le=15, description="Out-degree above zero")
    has_incoming_links: int = Field(0, ge=0, le=15, description="In-degree above zero")
    adequate_length: int = Field(0, ge=0, le=10, description="Word count credit")
    has_related_section: int = Field(0, ge=0, le=10, description="Related section present")
    no_broken_links: int = Field(0, ge=0, le=10, description="No broken outgoing links")
    bidirectional_ratio: int = Field(0, ge=0, le=15, description="Reciprocal neighbor credit")

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())


class ContentMetrics(BaseModel):
    """Content-derived metrics for one document."""

    model_config = ConfigDict(frozen=True)

    word_count: int = Field(0, description="Whitespace tokens in stripped text")
    token_estimate: int = Field(0, description="Approximate language-model tokens")
    keywords: Tuple[str, ...] = Field(default_factory=tuple, description="Ranked keywords")
    has_title: bool = Field(False, description="A '# ' heading line exists")
    has_overview_section: bool = Field(False, description="A '## Overview' line exists")
    has_related_section: bool = Field(False, description="A '## Related' line exists")


class DocumentNode(BaseModel):
    """Graph representation of one markdown document."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Canonical absolute path")
    label: str = Field(..., description="First top-level heading, else file stem")
    summary: str = Field("", description="Short excerpt (at most 200 chars)")
    category: str = Field(..., description="Parent directory name or 'root'")
    file_path: str = Field(..., description="Absolute path on disk")
    relative_path: str = Field(..., description="Path relative to the scanned root")

    has_title: bool = False
    has_overview_section: bool = False
    has_related_section: bool = False

    word_count: int = 0
    token_estimate: int = 0
    keywords: Tuple[str, ...] = Field(default_factory=tuple)

    in_degree: int = 0
    out_degree: int = 0
    broken_outgoing_count: int = 0
    bidirectional_ratio: float = Field(0.0, ge=0.0, le=1.0)

    health_score: int = Field(0, ge=0, le=100)
    health_breakdown: HealthBreakdown = Field(default_factory=HealthBreakdown)
    warnings: Tuple[ValidationWarning, ...] = Field(default_factory=tuple)

    @property
    def is_orphan(self) -> bool:
        return self.in_degree == 0 and self.out_degree == 0


class DirectedEdge(BaseModel):
    """A deduplicated reference from one document to another."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")
    label: str = Field(..., description="Link text")
    kind: LinkKind = Field(..., description="structural or inline")


class RawLinkCandidate(BaseModel):
    """Every link occurrence, kept only to build the broken link report."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    source_label: str
    source_file_path: str
    resolved_path: str
    label: str
    kind: LinkKind
    exists_on_disk: bool


# Reports

class BrokenLink(BaseModel):
    """A link whose target is neither a node nor a file on disk."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    source_label: str
    source_file_path: str
    target_path: str
    label: str


class BacklinkSuggestion(BaseModel):
    """Proposal that `from_id` should link back to `to_id`."""

    model_config = ConfigDict(frozen=True)

    from_id: str
    from_label: str
    to_id: str
    to_label: str
    to_file_path: str


class SimilaritySuggestion(BaseModel):
    """Proposed link between two unconnected, keyword-similar documents."""

    model_config = ConfigDict(frozen=True)

    node_a_id: str
    node_a_label: str
    node_b_id: str
    node_b_label: str
    score: float = Field(..., ge=0.0, le=1.0, description="Jaccard similarity (2 decimals)")


class GraphSnapshot(BaseModel):
    """Complete, immutable result of one analysis run."""

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Absolute path of the scanned folder")
    nodes: Tuple[DocumentNode, ...] = Field(default_factory=tuple)
    edges: Tuple[DirectedEdge, ...] = Field(default_factory=tuple)
    broken_links: Tuple[BrokenLink, ...] = Field(default_factory=tuple)
    backlink_suggestions: Tuple[BacklinkSuggestion, ...] = Field(default_factory=tuple)
    similarity_suggestions: Tuple[SimilaritySuggestion, ...] = Field(default_factory=tuple)
    health_score: int = Field(0, ge=0, le=100, description="Rounded mean of node scores")
    health_breakdown: HealthBreakdown = Field(default_factory=HealthBreakdown)
    total_token_estimate: int = 0

    def node(self, node_id: str) -> Optional[DocumentNode]:
        """Look up a node by id, or None when it is not part of the graph."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def stats(self) -> Dict[str, int]:
        return {
            "nodes": len(self.nodes),
            "edges": len(self.edges),
            "broken_links": len(self.broken_links),
            "backlink_suggestions": len(self.backlink_suggestions),
            "similarity_suggestions": len(self.similarity_suggestions),
            "orphans": sum(1 for n in self.nodes if n.is_orphan),
            "total_token_estimate": self.total_token_estimate,
        }
