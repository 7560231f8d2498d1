"""Service-layer response models.

Typed Pydantic models for analogy synthesis results.  The MCP layer dumps
them with ``model_dump()``; every field is a JSON primitive or a nested
model so the wire format is deterministic.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .validators import UnitFloat

NO_MATCH_DOMAIN = "none"
NO_MATCH_APPROACH = "No suitable analogy found"


class MappingEntry(BaseModel):
    source_feature: str
    target_feature: str


class Analogy(BaseModel):
    """A ranked candidate pattern for a problem."""

    source_domain: str
    structural_match: str
    mapping: list[MappingEntry] = Field(default_factory=list)
    transferable_insights: list[str] = Field(default_factory=list)
    confidence: UnitFloat = 0.0
    pattern_id: str


class BestAnalogy(BaseModel):
    """Top-ranked analogy with a synthesized approach, or the no-match placeholder."""

    domain: str = NO_MATCH_DOMAIN
    rationale: str = ""
    suggested_approach: str = NO_MATCH_APPROACH
    confidence: UnitFloat = 0.0

    @property
    def is_match(self) -> bool:
        return self.domain != NO_MATCH_DOMAIN


class SynthesisResult(BaseModel):
    """Result of an ``AnalogyService.synthesize()`` call."""

    problem_analyzed: str
    extracted_structure: dict[str, Any] = Field(default_factory=dict)
    analogies: list[Analogy] = Field(default_factory=list)
    best_analogy: BestAnalogy = Field(default_factory=BestAnalogy)
    abstraction_level: str = "deep"
    reinforced: bool = False
