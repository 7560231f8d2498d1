"""Shared Pydantic types and validators for reuse across models.

Centralises domain-list normalisation, range-clamped floats, concept-name
constraints, and Literal enums so every model speaks the same language.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, JsonValue

# ---------------------------------------------------------------------------
# Domain list normalisation
# ---------------------------------------------------------------------------


def normalize_domains(v: Any) -> list[str]:
    """Accept ``str | list | None`` and return a clean ``list[str]``.

    * ``"kitchen, ant"`` → ``["kitchen", "ant"]``
    * ``["kitchen", None, " ant "]`` → ``["kitchen", "ant"]``
    * ``None`` → ``[]``
    """
    if v is None:
        return []
    if isinstance(v, str):
        return [d.strip() for d in v.split(",") if d.strip()]
    if isinstance(v, list):
        return [s for item in v if item is not None and (s := str(item).strip())]
    return []


Domains = Annotated[list[str], BeforeValidator(normalize_domains)]
"""Flexible domain filter: accepts str, list or None, always outputs list[str]."""


# ---------------------------------------------------------------------------
# Numeric types
# ---------------------------------------------------------------------------

UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]
"""Float clamped to [0.0, 1.0] for strengths and confidences."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer ≥ 0 for access and usage counters."""


# ---------------------------------------------------------------------------
# String constraints
# ---------------------------------------------------------------------------

ConceptName = Annotated[str, Field(min_length=1)]
"""Non-empty concept display text."""

PatternId = Annotated[str, Field(min_length=1)]
"""Non-empty pattern identifier."""


# ---------------------------------------------------------------------------
# Open metadata
# ---------------------------------------------------------------------------

Metadata = dict[str, JsonValue]
"""String-keyed map of JSON primitives or nested JSON values."""


# ---------------------------------------------------------------------------
# Literal enums
# ---------------------------------------------------------------------------

RelationType = Literal["depends_on", "implements", "generalizes", "conflicts_with"]
AbstractionLevel = Literal["shallow", "deep"]
GraphAction = Literal["register", "query", "strengthen", "traverse", "stats", "list", "by_relationship"]
GraphQueryType = Literal["neighbors", "dependents", "path", "impact"]
PatternAction = Literal["list", "get", "search", "by_domain", "add", "strengthen", "stats"]
