"""Pattern-related data models.

A *pattern* is a structural abstraction of some source domain (a restaurant
kitchen, an ant colony, ...) together with the problems it typically faces
and the solutions it typically applies.  Patterns are the unit of analogical
retrieval and the only records persisted to disk.
"""

import time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validators import NonNegativeInt, PatternId


class PatternRelationship(BaseModel):
    """Pointer from a pattern to a related concept in the target domain."""

    type: str = Field(min_length=1)
    target: str = Field(min_length=1)


class PatternDraft(BaseModel):
    """A pattern as supplied by a caller, before the library assigns identity."""

    model_config = ConfigDict(extra="ignore")

    source_domain: str = Field(min_length=1)
    abstract_structure: str = Field(min_length=1)
    key_features: list[str] = Field(default_factory=list)
    common_problems: list[str] = Field(default_factory=list)
    typical_solutions: list[str] = Field(default_factory=list)
    relationships: list[PatternRelationship] = Field(default_factory=list)

    @field_validator("key_features", "common_problems", "typical_solutions", mode="before")
    @classmethod
    def drop_blank_entries(cls, v: object) -> object:
        """Strip whitespace and drop empty strings from text lists."""
        if isinstance(v, list):
            return [s for item in v if item is not None and (s := str(item).strip())]
        return v


class Pattern(PatternDraft):
    """A stored pattern with identity and usage bookkeeping."""

    id: PatternId
    created: float = Field(default_factory=time.time)
    usage_count: NonNegativeInt = 0

    def searchable_text(self) -> list[str]:
        """Fields covered by keyword search, in match order."""
        return [self.source_domain, self.abstract_structure, *self.key_features, *self.common_problems]


class PatternStore(BaseModel):
    """On-disk layout of the pattern library file."""

    patterns: list[Pattern]
    lastUpdated: float = Field(default_factory=time.time)  # noqa: N815
