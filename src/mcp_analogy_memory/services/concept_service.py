"""
Concept Service - request handling for the concept graph.

Turns validated ``concept_web_weaver`` requests into graph calls and renders
the results as JSON-ready dicts: strengths rounded to two decimals, path
steps numbered from 1, impact queries tagged with a severity.  Lookup misses
are reported with ``found: False`` rather than raised.
"""

import logging
from typing import Any

from ..graph.concept_graph import ConceptGraph, Neighbor, PathStep
from ..graph.schema import impact_severity
from ..models.mcp_inputs import ConceptGraphParams

logger = logging.getLogger(__name__)

NO_PATH_MESSAGE = "No path exists between these concepts"


def _round(strength: float) -> float:
    return round(strength, 2)


def _neighbor_dicts(items: list[Neighbor]) -> list[dict[str, Any]]:
    return [{"concept": n.concept, "relationship": n.relationship, "strength": _round(n.strength)} for n in items]


def _path_dicts(steps: list[PathStep]) -> list[dict[str, Any]]:
    return [
        {"step": i, "concept": s.concept, "relationship": s.relationship, "strength": _round(s.strength)}
        for i, s in enumerate(steps, start=1)
    ]


class ConceptService:
    """Dispatches concept graph actions."""

    def __init__(self, graph: ConceptGraph):
        self.graph = graph

    def handle(self, params: ConceptGraphParams) -> dict[str, Any]:
        """Run one validated request and return its response payload."""
        handlers = {
            "register": self.register,
            "query": self.query,
            "strengthen": self.strengthen,
            "traverse": self.traverse,
            "stats": self.stats,
            "list": self.list_concepts,
            "by_relationship": self.by_relationship,
        }
        return handlers[params.action](params)

    # ── Actions ─────────────────────────────────────────────────────────

    def register(self, params: ConceptGraphParams) -> dict[str, Any]:
        relationships = [r.model_dump() for r in params.relationships]
        concept_id = self.graph.register(params.concept, relationships, params.metadata)
        logger.info(f"Registered concept {concept_id} with {len(relationships)} relationships")
        return {
            "success": True,
            "concept_id": concept_id,
            "concept": params.concept,
            "relationships_created": len(relationships),
            "message": f'Concept "{params.concept}" registered successfully',
        }

    def query(self, params: ConceptGraphParams) -> dict[str, Any]:
        concept = params.concept
        found = self.graph.get_node(concept) is not None

        if params.query_type == "path":
            return self._path_response(concept, params.target_concept)

        if params.query_type == "dependents":
            dependents = _neighbor_dicts(self.graph.dependents(concept))
            return {"found": found, "concept": concept, "dependents": dependents, "count": len(dependents)}

        if params.query_type == "impact":
            impact = [
                {"concept": i.concept, "affected_edges": i.affected_edges}
                for i in self.graph.impact_analysis(concept)
            ]
            return {
                "found": found,
                "concept": concept,
                "impact": impact,
                "affected_count": len(impact),
                "severity": impact_severity(len(impact)),
            }

        # neighbors reinforces every edge it reports
        neighbors = _neighbor_dicts(self.graph.neighbors(concept))
        return {"found": found, "concept": concept, "neighbors": neighbors, "count": len(neighbors)}

    def strengthen(self, params: ConceptGraphParams) -> dict[str, Any]:
        if not self.graph.strengthen(params.concept, params.relationship_type):
            return {"success": False, "found": False, "concept": params.concept, "message": "Concept not found"}

        node = self.graph.get_node(params.concept)
        return {
            "success": True,
            "found": True,
            "concept": params.concept,
            "relationship_type": params.relationship_type,
            "access_count": node.access_count,
            "message": "Concept and its relationships strengthened",
        }

    def traverse(self, params: ConceptGraphParams) -> dict[str, Any]:
        return self._path_response(params.concept, params.target_concept)

    def stats(self, params: ConceptGraphParams) -> dict[str, Any]:
        s = self.graph.stats()
        return {
            "graph_statistics": {
                "total_concepts": s.node_count,
                "total_relationships": s.edge_count,
                "average_connection_strength": _round(s.avg_strength),
            }
        }

    def list_concepts(self, params: ConceptGraphParams) -> dict[str, Any]:
        concepts = self.graph.all_concepts()
        return {"concepts": concepts, "count": len(concepts)}

    def by_relationship(self, params: ConceptGraphParams) -> dict[str, Any]:
        matches = self.graph.query_by_relationship(params.relationship_type)
        return {
            "relationship_type": params.relationship_type,
            "edges": [{**m.to_dict(), "strength": _round(m.strength)} for m in matches],
            "count": len(matches),
        }

    # ── Helpers ─────────────────────────────────────────────────────────

    def _path_response(self, source: str, target: str) -> dict[str, Any]:
        found = self.graph.get_node(source) is not None and self.graph.get_node(target) is not None
        path = self.graph.find_path(source, target)
        if path is None:
            return {"found": found, "from": source, "to": target, "path": None, "message": NO_PATH_MESSAGE}
        return {"found": True, "from": source, "to": target, "path": _path_dicts(path), "path_length": len(path)}
