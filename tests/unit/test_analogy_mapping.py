"""Tests for term mapping, insight generation and approach synthesis."""

from mcp_analogy_memory.models.pattern import Pattern
from mcp_analogy_memory.storage.seed_patterns import seed_patterns
from mcp_analogy_memory.utils.analogy_mapping import (
    MAX_INSIGHTS,
    TermMapping,
    generate_approach,
    generate_insights,
    generate_mapping,
)

TASK_CLAIM_PROBLEM = "Multiple agents need to claim tasks without duplicating work"


def _seed(pattern_id: str) -> Pattern:
    return next(p for p in seed_patterns() if p.id == pattern_id)


class TestGenerateMapping:
    def test_restaurant_kitchen_to_task_claiming(self):
        mapping = generate_mapping(_seed("restaurant_kitchen"), TASK_CLAIM_PROBLEM)
        assert mapping == [
            TermMapping("ticket", "task"),
            TermMapping("task", "task"),
            TermMapping("worker", "agent"),
        ]

    def test_generic_fallback_when_few_matches(self):
        mapping = generate_mapping(_seed("ant_colony"), TASK_CLAIM_PROBLEM)
        assert [m.to_dict() for m in mapping] == [
            {"source_feature": "central coordination point", "target_feature": "orchestrator/coordinator"},
            {"source_feature": "worker/unit of work", "target_feature": "task/job"},
        ]

    def test_target_match_is_case_insensitive(self):
        pattern = Pattern(id="p", source_domain="diner", abstract_structure="x", key_features=["Menu board"])
        mapping = generate_mapping(pattern, "expose an api for clients")
        assert TermMapping("menu", "API") in mapping
        assert TermMapping("menu board", "API") in mapping


class TestGenerateInsights:
    def test_restaurant_kitchen_insights(self):
        insights = generate_insights(_seed("restaurant_kitchen"), TASK_CLAIM_PROBLEM)
        assert insights == [
            "Use pull-based model: workers claim tasks rather than having tasks pushed",
            "Use central coordination point for visibility and deduplication",
            "Track state transitions: pending -> claimed -> in_progress -> complete",
            "Ensure all participants have visibility into available work to avoid duplication",
        ]

    def test_feature_insight_needs_problem_hint(self):
        insights = generate_insights(_seed("restaurant_kitchen"), "One agent works alone")
        assert not any("visibility into available work" in i for i in insights)

    def test_reservation_insight(self):
        insights = generate_insights(_seed("library_system"), "Agents share a pool of connections")
        assert "Implement reservation system for fair resource access" in insights

    def test_deduplicated_and_capped(self):
        pattern = Pattern(
            id="p",
            source_domain="d",
            abstract_structure="x",
            typical_solutions=[
                "pull queue",
                "pull again",
                "priority lanes",
                "status board",
                "station layout",
                "central desk",
                "feedback loop",
            ],
        )
        insights = generate_insights(pattern, "anything")
        assert len(insights) == MAX_INSIGHTS
        assert len(set(insights)) == len(insights)


class TestGenerateApproach:
    def test_uses_first_three_insights_and_elaborations(self):
        kitchen = _seed("restaurant_kitchen")
        insights = generate_insights(kitchen, TASK_CLAIM_PROBLEM)
        approach = generate_approach(kitchen.source_domain, kitchen.abstract_structure, insights, TASK_CLAIM_PROBLEM)
        assert approach.startswith("Apply the restaurant kitchen pattern: Use pull-based model")
        assert insights[2] in approach
        assert insights[3] not in approach
        assert "task board" in approach

    def test_falls_back_to_structure_without_insights(self):
        approach = generate_approach("ant_colony", "Decentralized coordination", [], "route packets")
        assert approach == "Apply the ant colony pattern: Decentralized coordination"

    def test_dependency_and_priority_elaborations(self):
        approach = generate_approach("x", "y", [], "Jobs depend on each other and carry a priority")
        assert "Track dependencies" in approach
        assert "priority levels" in approach
