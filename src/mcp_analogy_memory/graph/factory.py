"""
Factory for creating the concept graph.

Builds a ConceptGraph from ConceptGraphSettings.  The graph is purely
in-memory, so every call yields a fresh, empty instance.
"""

import logging

from ..config import ConceptGraphSettings
from .concept_graph import ConceptGraph

logger = logging.getLogger(__name__)


def create_concept_graph(config: ConceptGraphSettings | None = None) -> ConceptGraph:
    """
    Create an empty concept graph with configured reinforcement constants.

    Args:
        config: Graph settings; defaults to ``settings.graph``.
    """
    if config is None:
        from ..config import settings

        config = settings.graph

    graph = ConceptGraph(
        initial_strength=config.initial_strength,
        register_increment=config.register_increment,
        access_increment=config.access_increment,
        strengthen_increment=config.strengthen_increment,
        max_strength=config.max_strength,
    )
    logger.info(
        f"Concept graph initialized (initial={config.initial_strength}, "
        f"access=+{config.access_increment}, strengthen=+{config.strengthen_increment})"
    )
    return graph
