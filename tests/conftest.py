import os
import sys

import pytest

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

from mcp_analogy_memory.graph.concept_graph import ConceptGraph  # noqa: E402
from mcp_analogy_memory.storage.pattern_library import PatternLibrary  # noqa: E402


@pytest.fixture
def patterns_file(tmp_path):
    """Path to a not-yet-existing pattern file in an isolated directory."""
    return tmp_path / "patterns.json"


@pytest.fixture
def pattern_library(patterns_file):
    """Freshly seeded pattern library backed by a temp file."""
    return PatternLibrary(patterns_file).load()


@pytest.fixture
def concept_graph():
    return ConceptGraph()
