"""
Structural similarity between a problem signature and a stored pattern.

Three additive sub-scores, each capped, normalised by their combined
maximum:

    term overlap       min(2 * shared words, 10)
    relationship fit   +3 per (relationship tag, key feature) keyword pair, max 10
    constraint fit     +2 per (constraint tag, common problem) mention, max 10

The abstraction level is applied afterwards: ``shallow`` adds a flat boost
(more, looser matches), ``deep`` damps the score (fewer, safer matches).
"""

from __future__ import annotations

from ..models.pattern import Pattern
from .structure_extraction import StructuralSignature

TERM_OVERLAP_WEIGHT = 2
TERM_OVERLAP_CAP = 10
RELATIONSHIP_WEIGHT = 3
RELATIONSHIP_CAP = 10
CONSTRAINT_WEIGHT = 2
CONSTRAINT_CAP = 10
MAX_SCORE = TERM_OVERLAP_CAP + RELATIONSHIP_CAP + CONSTRAINT_CAP

MIN_OVERLAP_WORD_LENGTH = 4

# (fragment of relationship tag, fragment expected in a key feature)
_RELATIONSHIP_FEATURE_PAIRS: tuple[tuple[str, str], ...] = (
    ("depend", "depend"),
    ("compete", "claim"),
    ("wait", "queue"),
)

DEFAULT_SHALLOW_BOOST = 0.2
DEFAULT_DEEP_DAMPING = 0.9


def term_overlap_score(signature: StructuralSignature, pattern: Pattern) -> int:
    problem_words = set(" ".join(signature.key_terms).lower().split())
    pattern_words = set(" ".join([*pattern.key_features, *pattern.common_problems, *pattern.typical_solutions]).lower().split())
    overlap = sum(1 for word in problem_words if len(word) >= MIN_OVERLAP_WORD_LENGTH and word in pattern_words)
    return min(overlap * TERM_OVERLAP_WEIGHT, TERM_OVERLAP_CAP)


def relationship_score(signature: StructuralSignature, pattern: Pattern) -> int:
    score = 0
    for rel_type in signature.relationship_types:
        for feature in pattern.key_features:
            lower = feature.lower()
            if any(tag in rel_type and hint in lower for tag, hint in _RELATIONSHIP_FEATURE_PAIRS):
                score += RELATIONSHIP_WEIGHT
    return min(score, RELATIONSHIP_CAP)


def constraint_score(signature: StructuralSignature, pattern: Pattern) -> int:
    score = 0
    for constraint in signature.constraints:
        phrase = constraint.replace("_", " ")
        score += CONSTRAINT_WEIGHT * sum(1 for problem in pattern.common_problems if phrase in problem.lower())
    return min(score, CONSTRAINT_CAP)


def score_pattern(signature: StructuralSignature, pattern: Pattern) -> float:
    """
    Raw structural similarity in [0, 1].

    Args:
        signature: Output of extract_structure()
        pattern: Candidate pattern

    Returns:
        Normalised similarity before abstraction-level adjustment
    """
    total = term_overlap_score(signature, pattern) + relationship_score(signature, pattern) + constraint_score(signature, pattern)
    return min(total / MAX_SCORE, 1.0)


def adjust_for_abstraction(
    score: float,
    abstraction_level: str,
    shallow_boost: float = DEFAULT_SHALLOW_BOOST,
    deep_damping: float = DEFAULT_DEEP_DAMPING,
) -> float:
    """Apply the abstraction-level bias; ``deep`` never exceeds ``shallow`` for the same score."""
    if abstraction_level == "shallow":
        return min(score + shallow_boost, 1.0)
    return score * deep_damping
