"""
Structural signature extraction from free-text problem statements.

Deterministic surface-pattern matching, no NLP model: a handful of
verb/noun co-occurrence templates pick out key terms, and fixed keyword
families map the text onto a small vocabulary of relationship and
constraint tags.  The same text always yields the same signature.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

MIN_TERM_LENGTH = 4

# Applied in order against the text as written (case-sensitive).
_TERM_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\w+)s?\s+(?:need|must|should|can)\s+"),
    re.compile(r"(\w+)s?\s+(?:coordinate|communicate|interact)"),
    re.compile(r"(?:manage|handle|process)\s+(\w+)"),
    re.compile(r"(?:implement|build|create)\s+(?:a\s+)?(\w+)"),
)


@dataclass(frozen=True)
class RelationshipRule:
    """Keyword family that, when present, contributes one relationship tag."""

    type: str
    source: str
    target: str
    keywords: tuple[str, ...]


_RELATIONSHIP_RULES: tuple[RelationshipRule, ...] = (
    RelationshipRule("depends_on", "dependent", "dependency", ("depend", "require", "wait for")),
    RelationshipRule("flows_to", "participants", "information", ("communicate", "share", "send")),
    RelationshipRule("competes_for", "actors", "resources", ("compete", "claim", "acquire")),
    RelationshipRule("coordinates_with", "participants", "central", ("coordinate", "organize", "synchronize")),
    RelationshipRule("wait_in", "items", "queue", ("queue", "waiting", "pending")),
)

_CONSTRAINT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "no_duplication": ("without duplicat", "avoid duplicat", "no duplicat"),
    "real_time": ("real-time", "immediate", "instant"),
    "scalability": ("scalable", "scale", "growing"),
    "dynamic_workload": ("unknown", "dynamic", "uncertain"),
    "fault_tolerance": ("fault", "failure", "resilient"),
}

CONSTRAINT_TAGS: tuple[str, ...] = tuple(_CONSTRAINT_KEYWORDS)
RELATIONSHIP_TAGS: tuple[str, ...] = tuple(rule.type for rule in _RELATIONSHIP_RULES)


@dataclass(frozen=True)
class StructuralRelationship:
    source: str
    target: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.source, "to": self.target, "type": self.type}


@dataclass(frozen=True)
class StructuralSignature:
    """Normalized structure of a problem statement."""

    key_terms: list[str] = field(default_factory=list)
    relationships: list[StructuralRelationship] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)

    @property
    def relationship_types(self) -> list[str]:
        return [r.type for r in self.relationships]

    def to_dict(self) -> dict[str, Any]:
        return {
            "key_terms": list(self.key_terms),
            "relationships": [r.to_dict() for r in self.relationships],
            "relationship_types": self.relationship_types,
            "constraints": list(self.constraints),
        }


def _extract_key_terms(text: str) -> list[str]:
    terms: list[str] = []
    for pattern in _TERM_PATTERNS:
        for match in pattern.finditer(text):
            term = match.group(1)
            if len(term) >= MIN_TERM_LENGTH and term not in terms:
                terms.append(term)
    return terms


def extract_structure(text: str) -> StructuralSignature:
    """
    Extract a structural signature from a problem statement.

    Args:
        text: Free-text problem description

    Returns:
        StructuralSignature with key terms, relationship tags (at most one
        per keyword family) and constraint tags
    """
    if not text or not text.strip():
        return StructuralSignature()

    lower = text.lower()

    relationships = [
        StructuralRelationship(source=rule.source, target=rule.target, type=rule.type)
        for rule in _RELATIONSHIP_RULES
        if any(kw in lower for kw in rule.keywords)
    ]
    constraints = [tag for tag, keywords in _CONSTRAINT_KEYWORDS.items() if any(kw in lower for kw in keywords)]

    return StructuralSignature(
        key_terms=_extract_key_terms(text),
        relationships=relationships,
        constraints=constraints,
    )
