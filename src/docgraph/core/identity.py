import logging
import tomllib
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "docgraph.toml"


class ConfigError(Exception):
    """Raised when docgraph.toml exists but cannot be used."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


# ============================================================================
# Scan Configuration
# ============================================================================

class ScanConfig(BaseModel):
    """Corpus scanning configuration."""
    skip_dirs: List[str] = Field(
        default_factory=lambda: [
            ".git", ".hg", ".svn", "node_modules", "bower_components", ".venv", "venv",
        ],
        description="Directory names never descended into"
    )


# ============================================================================
# Link Configuration
# ============================================================================

class SectionPattern(BaseModel):
    """A heading whose list-style links are treated as structural."""
    title: str = Field(..., description="Heading text, matched exactly")
    level: int = Field(default=2, ge=1, le=6, description="Heading level (number of '#')")
    strip_from_inline: bool = Field(
        default=False,
        description="Remove this section's body before scanning for inline links"
    )

    @property
    def marker(self) -> str:
        return "#" * self.level + " " + self.title


def default_sections() -> List[SectionPattern]:
    return [
        SectionPattern(title="Related", strip_from_inline=True),
        SectionPattern(title="Full Map"),
        SectionPattern(title="Quick Navigation"),
        SectionPattern(title="Architecture Decision Records"),
        SectionPattern(title="Company"),
        SectionPattern(title="Architecture"),
        SectionPattern(title="Components"),
        SectionPattern(title="Operations"),
    ]


class LinkConfig(BaseModel):
    """Link extraction configuration."""
    sections: List[SectionPattern] = Field(
        default_factory=default_sections,
        description="Ordered list of structural section headings"
    )


# ============================================================================
# Analysis Configuration
# ============================================================================

class SimilarityConfig(BaseModel):
    """Keyword similarity suggestion settings."""
    threshold: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Minimum Jaccard similarity for a suggestion"
    )
    max_suggestions: int = Field(
        default=20,
        ge=0,
        description="Keep at most this many suggestions"
    )


class ContentConfig(BaseModel):
    """Content analysis settings."""
    max_keywords: int = Field(default=15, ge=0, description="Keywords kept per document")
    summary_max_chars: int = Field(default=200, ge=4, description="Summary length limit")


# ============================================================================
# Complete Configuration
# ============================================================================

class DocgraphConfig(BaseModel):
    """Complete docgraph.toml configuration."""
    scan: ScanConfig = Field(default_factory=ScanConfig)
    links: LinkConfig = Field(default_factory=LinkConfig)
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)


def load_docgraph_config(
    root: Path, filename: str = DEFAULT_CONFIG_FILENAME
) -> DocgraphConfig:
    """Load docgraph.toml from the corpus root, returning defaults if absent.

    Raises:
        ConfigError: If the file exists but is not valid TOML or does not
            match the configuration schema.
    """
    toml_path = Path(root) / filename
    if not toml_path.is_file():
        logger.debug("No %s in %s, using defaults", filename, root)
        return DocgraphConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {toml_path}: {e}", path=toml_path) from e

    try:
        config = DocgraphConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {toml_path}: {e}", path=toml_path) from e

    logger.info("Loaded configuration from %s", toml_path)
    return config
