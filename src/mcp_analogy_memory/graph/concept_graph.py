"""
In-memory concept graph with Hebbian-style reinforcement.

Nodes are concepts (keyed by a deterministic slug of their display text),
edges are typed, directed relationships carrying a strength in [0, 1].
Strength only ever grows:

- register() on an existing (from, to, type) edge   +register_increment
- neighbors() on the source node (a *mutating* read) +access_increment
- strengthen() with a relationship type             +strengthen_increment

all capped at max_strength.  Nothing decays and nothing is persisted: the
graph lives exactly as long as the ConceptGraph instance that owns it.
"""

import logging
import time
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any

from ..utils.slugs import slugify

logger = logging.getLogger(__name__)

# Reinforcement defaults (overridden by ConceptGraphSettings)
INITIAL_STRENGTH = 0.3
REGISTER_INCREMENT = 0.1
ACCESS_INCREMENT = 0.05
STRENGTHEN_INCREMENT = 0.15
MAX_STRENGTH = 1.0


# =============================================================================
# Data structures
# =============================================================================


@dataclass
class ConceptNode:
    """A registered concept."""

    id: str
    concept: str
    created: float = field(default_factory=lambda: time.time())
    access_count: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Edge:
    """Directed, typed relationship between two concept ids."""

    source: str
    target: str
    type: str
    strength: float
    created: float = field(default_factory=lambda: time.time())

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.type,
            "strength": self.strength,
            "created": self.created,
        }


@dataclass
class Neighbor:
    """One hop away from a concept, in either direction."""

    concept: str
    relationship: str
    strength: float


@dataclass
class PathStep:
    """A single hop along a path found by find_path()."""

    concept: str
    relationship: str
    strength: float


@dataclass
class ImpactResult:
    """A concept that points at the analysed concept, and through which edge types."""

    concept: str
    affected_edges: list[str]


@dataclass
class RelationshipMatch:
    """An edge of a queried relationship type, with display names resolved."""

    source: str
    target: str
    strength: float

    def to_dict(self) -> dict[str, Any]:
        return {"from": self.source, "to": self.target, "strength": self.strength}


@dataclass
class GraphStats:
    node_count: int
    edge_count: int
    avg_strength: float


# =============================================================================
# Concept graph
# =============================================================================


class ConceptGraph:
    """Directed, labeled, weighted multigraph over concepts.

    Edges are unique per (from, to, type) triple; registering the same
    triple twice reinforces the existing edge instead of adding another.
    Lookups never raise: unknown concepts yield empty results or ``None``.
    """

    def __init__(
        self,
        initial_strength: float = INITIAL_STRENGTH,
        register_increment: float = REGISTER_INCREMENT,
        access_increment: float = ACCESS_INCREMENT,
        strengthen_increment: float = STRENGTHEN_INCREMENT,
        max_strength: float = MAX_STRENGTH,
    ):
        self._initial_strength = initial_strength
        self._register_increment = register_increment
        self._access_increment = access_increment
        self._strengthen_increment = strengthen_increment
        self._max_strength = max_strength

        self._nodes: dict[str, ConceptNode] = {}
        self._edges: dict[str, list[Edge]] = {}  # keyed by source id

    # ── Helpers ─────────────────────────────────────────────────────────

    def _reinforce(self, edge: Edge, amount: float) -> None:
        edge.strength = min(edge.strength + amount, self._max_strength)

    def _display(self, concept_id: str) -> str:
        node = self._nodes.get(concept_id)
        return node.concept if node is not None else concept_id

    def _ensure_node(self, concept: str) -> ConceptNode:
        concept_id = slugify(concept)
        node = self._nodes.get(concept_id)
        if node is None:
            node = ConceptNode(id=concept_id, concept=concept)
            self._nodes[concept_id] = node
        return node

    # ── Writes ──────────────────────────────────────────────────────────

    def register(
        self,
        concept: str,
        relationships: list[dict[str, str]] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """
        Create or update a concept and its outgoing relationships.

        Metadata is shallow-merged into an existing node.  Each relationship
        target is created as a bare placeholder if unknown.  An existing
        (from, to, type) edge is reinforced; otherwise a new edge starts at
        the initial strength.  Does not count as an access.

        Args:
            concept: Display text of the concept
            relationships: List of {"type": ..., "target": ...} dicts
            metadata: Optional key/value data to attach

        Returns:
            The concept's slug id
        """
        node = self._ensure_node(concept)
        if metadata:
            node.metadata = {**node.metadata, **metadata}

        if relationships:
            outgoing = self._edges.setdefault(node.id, [])
            for rel in relationships:
                target = self._ensure_node(rel["target"])
                existing = next((e for e in outgoing if e.target == target.id and e.type == rel["type"]), None)
                if existing is not None:
                    self._reinforce(existing, self._register_increment)
                else:
                    outgoing.append(
                        Edge(source=node.id, target=target.id, type=rel["type"], strength=self._initial_strength)
                    )

        return node.id

    def strengthen(self, concept: str, relationship_type: str | None = None) -> bool:
        """
        Record a successful use of a concept.

        Bumps the node's access count and, when a relationship type is given,
        reinforces every outgoing edge of that type.

        Returns:
            True if the concept exists, False if the call was a no-op
        """
        concept_id = slugify(concept)
        node = self._nodes.get(concept_id)
        if node is None:
            return False

        node.access_count += 1
        if relationship_type is not None:
            for edge in self._edges.get(concept_id, []):
                if edge.type == relationship_type:
                    self._reinforce(edge, self._strengthen_increment)
        logger.debug(f"Strengthened concept {concept_id} (type={relationship_type})")
        return True

    # ── Reads ───────────────────────────────────────────────────────────

    def get_node(self, concept: str) -> ConceptNode | None:
        """Look up a node by display text (resolved through the slug)."""
        return self._nodes.get(slugify(concept))

    def neighbors(self, concept: str) -> list[Neighbor]:
        """
        Outgoing relationships of a concept. MUTATING READ.

        Traversal counts as usage: the node's access count is incremented and
        every returned edge is reinforced by the access increment *before* its
        strength is reported.  Unknown concepts return [] and are not created.
        """
        concept_id = slugify(concept)
        node = self._nodes.get(concept_id)
        if node is None:
            return []

        outgoing = self._edges.get(concept_id, [])
        node.access_count += 1
        for edge in outgoing:
            self._reinforce(edge, self._access_increment)

        return [Neighbor(self._display(e.target), e.type, e.strength) for e in outgoing]

    def dependents(self, concept: str) -> list[Neighbor]:
        """Concepts with an edge into the given concept. Read-only, no reinforcement."""
        concept_id = slugify(concept)
        return [
            Neighbor(self._display(source_id), edge.type, edge.strength)
            for source_id, edges in self._edges.items()
            for edge in edges
            if edge.target == concept_id
        ]

    def find_path(self, source: str, target: str) -> list[PathStep] | None:
        """
        Shortest path by hop count (BFS). Read-only.

        Strength is carried along for display but does not influence the
        search.  Among equal-length paths the first one discovered wins,
        which follows edge insertion order.

        Returns:
            [] when source and target are the same known concept,
            a list of steps when reachable, None when unknown or unreachable
        """
        source_id = slugify(source)
        target_id = slugify(target)

        if source_id not in self._nodes or target_id not in self._nodes:
            return None
        if source_id == target_id:
            return []

        queue: deque[tuple[str, list[PathStep]]] = deque([(source_id, [])])
        visited = {source_id}

        while queue:
            current, path = queue.popleft()
            for edge in self._edges.get(current, []):
                step = PathStep(self._display(edge.target), edge.type, edge.strength)
                if edge.target == target_id:
                    return [*path, step]
                if edge.target not in visited:
                    visited.add(edge.target)
                    queue.append((edge.target, [*path, step]))

        return None

    def impact_analysis(self, concept: str) -> list[ImpactResult]:
        """Which concepts would be affected, and via which edge types, if this one changed."""
        concept_id = slugify(concept)
        impact: list[ImpactResult] = []
        for source_id, edges in self._edges.items():
            affected = [edge.type for edge in edges if edge.target == concept_id]
            if affected:
                impact.append(ImpactResult(concept=self._display(source_id), affected_edges=affected))
        return impact

    def query_by_relationship(self, relationship_type: str) -> list[RelationshipMatch]:
        """All edges of one type across the graph, strongest first."""
        matches = [
            RelationshipMatch(self._display(source_id), self._display(edge.target), edge.strength)
            for source_id, edges in self._edges.items()
            for edge in edges
            if edge.type == relationship_type
        ]
        return sorted(matches, key=lambda m: m.strength, reverse=True)

    def all_concepts(self) -> list[str]:
        """Display text of every node, in registration order."""
        return [node.concept for node in self._nodes.values()]

    def stats(self) -> GraphStats:
        strengths = [edge.strength for edges in self._edges.values() for edge in edges]
        return GraphStats(
            node_count=len(self._nodes),
            edge_count=len(strengths),
            avg_strength=sum(strengths) / len(strengths) if strengths else 0.0,
        )

    # ── Snapshots ───────────────────────────────────────────────────────

    def export(self) -> dict[str, list[dict[str, Any]]]:
        """Plain-data snapshot of every node and edge."""
        return {
            "nodes": [asdict(node) for node in self._nodes.values()],
            "edges": [edge.to_dict() for edges in self._edges.values() for edge in edges],
        }

    def load_snapshot(self, data: dict[str, list[dict[str, Any]]]) -> None:
        """
        Replace the graph's contents with a snapshot produced by export().

        The snapshot is parsed in full before anything is replaced; a malformed
        entry raises KeyError and leaves the current graph untouched.
        """
        nodes: dict[str, ConceptNode] = {}
        edges: dict[str, list[Edge]] = {}

        for raw in data.get("nodes", []):
            node = ConceptNode(
                id=raw["id"],
                concept=raw["concept"],
                created=raw.get("created", time.time()),
                access_count=raw.get("access_count", 0),
                metadata=dict(raw.get("metadata") or {}),
            )
            nodes[node.id] = node

        for raw in data.get("edges", []):
            edge = Edge(
                source=raw["from"],
                target=raw["to"],
                type=raw["type"],
                strength=raw["strength"],
                created=raw.get("created", time.time()),
            )
            edges.setdefault(edge.source, []).append(edge)

        self._nodes = nodes
        self._edges = edges

        logger.info(f"Loaded concept graph snapshot: {len(self._nodes)} nodes")

    def __repr__(self) -> str:
        s = self.stats()
        return f"ConceptGraph(nodes={s.node_count}, edges={s.edge_count})"
