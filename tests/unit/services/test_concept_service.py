"""Tests for ConceptService request handling."""

import pytest

from mcp_analogy_memory.models.mcp_inputs import ConceptGraphParams
from mcp_analogy_memory.services.concept_service import ConceptService


@pytest.fixture
def concept_service(concept_graph):
    return ConceptService(concept_graph)


def _call(service: ConceptService, **kwargs) -> dict:
    return service.handle(ConceptGraphParams(**kwargs))


def _register(service: ConceptService, concept: str, *targets: tuple[str, str]) -> dict:
    relationships = [{"type": t, "target": target} for t, target in targets]
    return _call(service, action="register", concept=concept, relationships=relationships)


class TestRegisterAndList:
    def test_register_response(self, concept_service):
        result = _register(concept_service, "Auth Middleware", ("depends_on", "session storage"))
        assert result["success"] is True
        assert result["concept_id"] == "auth_middleware"
        assert result["relationships_created"] == 1

    def test_list(self, concept_service):
        _register(concept_service, "a", ("depends_on", "b"))
        assert _call(concept_service, action="list") == {"concepts": ["a", "b"], "count": 2}


class TestQuery:
    def test_neighbors_rounded_and_reinforced(self, concept_service):
        _register(concept_service, "x", ("depends_on", "y"))
        result = _call(concept_service, action="query", concept="x")
        assert result["found"] is True
        assert result["neighbors"] == [{"concept": "y", "relationship": "depends_on", "strength": 0.35}]
        assert result["count"] == 1

    def test_unknown_concept_not_found(self, concept_service):
        result = _call(concept_service, action="query", concept="ghost")
        assert result["found"] is False
        assert result["neighbors"] == []

    def test_dependents(self, concept_service):
        _register(concept_service, "api", ("depends_on", "db"))
        result = _call(concept_service, action="query", concept="db", query_type="dependents")
        assert result["dependents"] == [{"concept": "api", "relationship": "depends_on", "strength": 0.3}]

    def test_impact_severity(self, concept_service):
        for name in ("a", "b", "c"):
            _register(concept_service, name, ("depends_on", "core"))
        result = _call(concept_service, action="query", concept="core", query_type="impact")
        assert result["affected_count"] == 3
        assert result["severity"] == "medium"
        assert result["impact"][0] == {"concept": "a", "affected_edges": ["depends_on"]}

    def test_path_query(self, concept_service):
        _register(concept_service, "a", ("depends_on", "b"))
        _register(concept_service, "b", ("implements", "c"))
        result = _call(concept_service, action="query", concept="a", query_type="path", target_concept="c")
        assert result["path"] == [
            {"step": 1, "concept": "b", "relationship": "depends_on", "strength": 0.3},
            {"step": 2, "concept": "c", "relationship": "implements", "strength": 0.3},
        ]
        assert result["path_length"] == 2


class TestTraverse:
    def test_unreachable(self, concept_service):
        _register(concept_service, "a")
        _register(concept_service, "b")
        result = _call(concept_service, action="traverse", concept="a", target_concept="b")
        assert result["found"] is True
        assert result["path"] is None
        assert result["message"] == "No path exists between these concepts"

    def test_unknown_endpoint(self, concept_service):
        _register(concept_service, "a")
        result = _call(concept_service, action="traverse", concept="a", target_concept="ghost")
        assert result["found"] is False
        assert result["path"] is None

    def test_same_concept(self, concept_service):
        _register(concept_service, "a")
        result = _call(concept_service, action="traverse", concept="a", target_concept="a")
        assert result["path"] == []
        assert result["path_length"] == 0


class TestStrengthenAndStats:
    def test_strengthen_known(self, concept_service):
        _register(concept_service, "a", ("depends_on", "b"))
        result = _call(concept_service, action="strengthen", concept="a", relationship_type="depends_on")
        assert result["success"] is True
        assert result["access_count"] == 1
        edges = _call(concept_service, action="by_relationship", relationship_type="depends_on")["edges"]
        assert edges == [{"from": "a", "to": "b", "strength": 0.45}]

    def test_strengthen_unknown(self, concept_service):
        result = _call(concept_service, action="strengthen", concept="ghost")
        assert result["success"] is False
        assert result["found"] is False

    def test_stats(self, concept_service):
        _register(concept_service, "a", ("depends_on", "b"), ("implements", "c"))
        stats = _call(concept_service, action="stats")["graph_statistics"]
        assert stats == {"total_concepts": 3, "total_relationships": 2, "average_connection_strength": 0.3}
