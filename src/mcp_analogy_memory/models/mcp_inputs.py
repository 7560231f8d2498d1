"""MCP tool input models.

Each MCP tool function validates its inputs by constructing the
corresponding model: range checks, enum checking, and action-dependent
required fields all live here as declarative constraints.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

from .pattern import PatternDraft
from .validators import (
    AbstractionLevel,
    ConceptName,
    Domains,
    GraphAction,
    GraphQueryType,
    Metadata,
    PatternAction,
    PatternId,
    RelationType,
)


class AnalogyParams(BaseModel):
    """Validated input for the ``analogy_synthesizer`` MCP tool."""

    problem_description: str = Field(min_length=1)
    source_domains: Domains = []
    abstraction_level: AbstractionLevel = "deep"
    max_results: int | None = Field(default=None, ge=1, le=10)

    @model_validator(mode="after")
    def description_not_blank(self) -> Self:
        if not self.problem_description.strip():
            raise ValueError("problem_description must not be blank")
        return self


class RelationshipInput(BaseModel):
    """One outgoing relationship supplied with a ``register`` action."""

    type: RelationType
    target: ConceptName


class ConceptGraphParams(BaseModel):
    """Validated input for the ``concept_web_weaver`` MCP tool."""

    action: GraphAction
    concept: ConceptName | None = None
    relationships: list[RelationshipInput] = Field(default_factory=list)
    query_type: GraphQueryType = "neighbors"
    target_concept: ConceptName | None = None
    relationship_type: RelationType | None = None
    metadata: Metadata | None = None

    @model_validator(mode="after")
    def validate_action_fields(self) -> Self:
        """Require the fields each action depends on."""
        if self.action in {"register", "query", "strengthen", "traverse"} and not self.concept:
            raise ValueError(f"concept is required for '{self.action}'")
        if self.action == "traverse" and not self.target_concept:
            raise ValueError("target_concept is required for 'traverse'")
        if self.action == "query" and self.query_type == "path" and not self.target_concept:
            raise ValueError("target_concept is required for 'path' queries")
        if self.action == "by_relationship" and not self.relationship_type:
            raise ValueError("relationship_type is required for 'by_relationship'")
        return self


class PatternLibraryParams(BaseModel):
    """Validated input for the ``pattern_library`` MCP tool."""

    action: PatternAction
    pattern_id: PatternId | None = None
    keyword: str | None = None
    domain: str | None = None
    pattern: PatternDraft | None = None

    @model_validator(mode="after")
    def validate_action_fields(self) -> Self:
        required: dict[str, tuple[str, Any]] = {
            "get": ("pattern_id", self.pattern_id),
            "strengthen": ("pattern_id", self.pattern_id),
            "search": ("keyword", self.keyword),
            "by_domain": ("domain", self.domain),
            "add": ("pattern", self.pattern),
        }
        if self.action in required:
            name, value = required[self.action]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValueError(f"{name} is required for '{self.action}'")
        return self
