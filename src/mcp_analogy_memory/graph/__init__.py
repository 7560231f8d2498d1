"""
Graph layer for MCP Analogy Memory.

Provides an in-memory concept graph with Hebbian-style reinforcement:
- Typed, directed relationship edges (depends_on, implements, generalizes, conflicts_with)
- Reads through neighbors() strengthen the edges they traverse
- No decay, no persistence (process-lifetime store)
"""

from .concept_graph import ConceptGraph
from .factory import create_concept_graph
from .schema import RELATION_TYPES

__all__ = [
    "ConceptGraph",
    "RELATION_TYPES",
    "create_concept_graph",
]
