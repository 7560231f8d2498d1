"""Service layer: request handling shared by every tool surface."""

from .analogy_service import AnalogyService
from .concept_service import ConceptService
from .pattern_service import PatternService

__all__ = ["AnalogyService", "ConceptService", "PatternService"]
