"""
docgraph Configuration

Runtime settings come from environment variables (prefixed with DOCGRAPH_)
and the optional ~/.docgraph/.env file. Per-corpus analysis options live in a
docgraph.toml at the scanned root (see docgraph.core.identity).

Key settings:
- DOCGRAPH_LOG_LEVEL: Logging level for the CLI (default: WARNING)
- DOCGRAPH_CONFIG_FILENAME: Name of the per-corpus config file
- DOCGRAPH_JSON_EXPORT_NAME / DOCGRAPH_INDEX_EXPORT_NAME: Default export names
"""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """docgraph runtime settings."""

    log_level: str = "WARNING"

    # Per-corpus configuration file, looked up in the scanned root
    config_filename: str = "docgraph.toml"

    # Default export file names, written into the scanned root
    json_export_name: str = "docgraph.json"
    index_export_name: str = "GRAPH_INDEX.md"

    model_config = SettingsConfigDict(
        env_prefix="DOCGRAPH_",
        env_file=Path.home() / ".docgraph" / ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


settings = Settings()
