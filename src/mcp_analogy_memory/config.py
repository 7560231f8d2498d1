"""Configuration for MCP Analogy Memory.

Each concern gets its own ``BaseSettings`` class with an ``MCP_<AREA>_``
environment prefix.  The aggregate :class:`Settings` is exposed as the
module-level ``settings`` instance used by factories and the server.
"""

from pathlib import Path
from typing import Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_DIR = Path.home() / ".mcp-analogy-memory"
PATTERNS_FILENAME = "patterns.json"


class PathsSettings(BaseSettings):
    """Filesystem locations for persisted state."""

    model_config = SettingsConfigDict(env_prefix="MCP_PATHS_", extra="ignore")

    base_dir: Path = DEFAULT_BASE_DIR
    patterns_file: Path | None = None

    @model_validator(mode="after")
    def derive_patterns_file(self) -> Self:
        """Default the pattern store to ``<base_dir>/patterns.json``."""
        if self.patterns_file is None:
            self.patterns_file = self.base_dir / PATTERNS_FILENAME
        return self


class ConceptGraphSettings(BaseSettings):
    """Reinforcement constants for the in-memory concept graph."""

    model_config = SettingsConfigDict(env_prefix="MCP_GRAPH_", extra="ignore")

    initial_strength: float = Field(default=0.3, ge=0.0, le=1.0)
    register_increment: float = Field(default=0.1, ge=0.0, le=1.0)
    access_increment: float = Field(default=0.05, ge=0.0, le=1.0)
    strengthen_increment: float = Field(default=0.15, ge=0.0, le=1.0)
    max_strength: float = Field(default=1.0, gt=0.0, le=1.0)


class AnalogySettings(BaseSettings):
    """Scoring and reinforcement knobs for analogy synthesis."""

    model_config = SettingsConfigDict(env_prefix="MCP_ANALOGY_", extra="ignore")

    reinforce_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    shallow_boost: float = Field(default=0.2, ge=0.0, le=1.0)
    deep_damping: float = Field(default=0.9, gt=0.0, le=1.0)
    default_max_results: int = Field(default=3, ge=1, le=10)


class DebugSettings(BaseSettings):
    """Diagnostics toggles."""

    model_config = SettingsConfigDict(env_prefix="MCP_DEBUG_", extra="ignore")

    latency_metrics: bool = False


class Settings(BaseSettings):
    """Root settings object aggregating every concern."""

    model_config = SettingsConfigDict(extra="ignore")

    paths: PathsSettings = Field(default_factory=PathsSettings)
    graph: ConceptGraphSettings = Field(default_factory=ConceptGraphSettings)
    analogy: AnalogySettings = Field(default_factory=AnalogySettings)
    debug: DebugSettings = Field(default_factory=DebugSettings)


settings = Settings()
