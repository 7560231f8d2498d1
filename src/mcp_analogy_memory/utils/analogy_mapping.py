"""
Source→target term mapping, transferable insights, and suggested approach.

All three are template-driven: fixed term tables and substring triggers
over a pattern's features/solutions and the raw problem text.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.pattern import Pattern

MAX_INSIGHTS = 5
MIN_SPECIFIC_MAPPINGS = 3


@dataclass(frozen=True)
class TermMapping:
    source_feature: str
    target_feature: str

    def to_dict(self) -> dict[str, str]:
        return {"source_feature": self.source_feature, "target_feature": self.target_feature}


# (source-domain terms, target-domain terms)
_TERM_TABLE: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("ticket", "order", "task"), ("task", "job", "work item", "request")),
    (("worker", "chef", "server"), ("agent", "worker", "process", "service")),
    (("ticket rail", "expediter", "kitchen display"), ("task queue", "message broker", "coordination service")),
    (("customer", "diner"), ("user", "client", "requester")),
    (("table", "station"), ("resource", "endpoint", "service instance")),
    (("menu", "menu board"), ("API", "service catalog", "available operations")),
)

_GENERIC_MAPPINGS: tuple[TermMapping, ...] = (
    TermMapping("central coordination point", "orchestrator/coordinator"),
    TermMapping("worker/unit of work", "task/job"),
)

# Substring of a typical solution → insight it unlocks
_SOLUTION_INSIGHTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("pull",), "Use pull-based model: workers claim tasks rather than having tasks pushed"),
    (("priority",), "Implement priority queue for handling urgent items"),
    (("state", "status"), "Track state transitions: pending -> claimed -> in_progress -> complete"),
    (("specialization", "station"), "Allow workers to specialize by capability/skill type"),
    (("central",), "Use central coordination point for visibility and deduplication"),
    (("feedback",), "Implement feedback mechanism for adaptive behavior"),
)

# (substring of a key feature, substring required in the problem) → insight
_FEATURE_INSIGHTS: tuple[tuple[str, str, str], ...] = (
    ("visibility", "multiple", "Ensure all participants have visibility into available work to avoid duplication"),
    ("reservation", "share", "Implement reservation system for fair resource access"),
)


def generate_mapping(pattern: Pattern, problem_text: str) -> list[TermMapping]:
    """
    Map source-domain vocabulary onto the problem's vocabulary.

    For each table row, every source term present in a key feature is paired
    with the first target term found in the problem text.  Generic fallbacks
    are appended when fewer than three specific mappings were found.
    """
    problem_lower = problem_text.lower()
    features = [f.lower() for f in pattern.key_features]
    mapping: list[TermMapping] = []

    for sources, targets in _TERM_TABLE:
        for source in sources:
            if not any(source in feature for feature in features):
                continue
            target = next((t for t in targets if t.lower() in problem_lower), None)
            if target is not None:
                mapping.append(TermMapping(source, target))

    if len(mapping) < MIN_SPECIFIC_MAPPINGS:
        mapping.extend(_GENERIC_MAPPINGS)
    return mapping


def generate_insights(pattern: Pattern, problem_text: str) -> list[str]:
    """Actionable, software-flavoured translations of the pattern's solutions (max 5)."""
    problem_lower = problem_text.lower()
    insights: list[str] = []

    for solution in pattern.typical_solutions:
        lower = solution.lower()
        for triggers, insight in _SOLUTION_INSIGHTS:
            if any(t in lower for t in triggers):
                insights.append(insight)

    for feature in pattern.key_features:
        lower = feature.lower()
        for feature_hint, problem_hint, insight in _FEATURE_INSIGHTS:
            if feature_hint in lower and problem_hint in problem_lower:
                insights.append(insight)

    # Several solutions can trigger the same template
    return list(dict.fromkeys(insights))[:MAX_INSIGHTS]


def generate_approach(source_domain: str, abstract_structure: str, insights: list[str], problem_text: str) -> str:
    """Compose a recommended approach from the best analogy."""
    lower = problem_text.lower()
    approach = f"Apply the {source_domain.replace('_', ' ')} pattern: "

    if insights:
        approach += insights[0]
        if len(insights) > 1:
            approach += ". " + ". ".join(insights[1:3])
    else:
        approach += abstract_structure

    if "task" in lower and "multiple" in lower:
        approach += ". Implement a task board where agents can claim available work, ensuring no duplication."
    if "depend" in lower or "wait" in lower:
        approach += ". Track dependencies between items and only make work available when prerequisites are satisfied."
    if "priority" in lower:
        approach += ". Support priority levels to ensure important work is handled first."

    return approach
