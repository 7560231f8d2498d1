"""Tests for the file-backed pattern library."""

import json
import time

import pytest

from mcp_analogy_memory.models.pattern import PatternDraft
from mcp_analogy_memory.storage import create_pattern_library
from mcp_analogy_memory.storage.pattern_library import PatternLibrary
from mcp_analogy_memory.storage.seed_patterns import SEED_PATTERN_IDS

BROKER_DRAFT = {
    "source_domain": "Post Office",
    "abstract_structure": "Store-and-forward routing through sorting centres",
    "key_features": ["Sorting by destination", "  ", "Mailboxes as queues"],
    "common_problems": ["Lost parcels"],
    "typical_solutions": ["Tracking numbers"],
}


# =============================================================================
# Loading and seeding
# =============================================================================


class TestLoad:
    def test_missing_file_seeds_and_persists(self, patterns_file):
        library = PatternLibrary(patterns_file).load()
        assert library.loaded
        assert [p.id for p in library.get_all()] == list(SEED_PATTERN_IDS)
        assert patterns_file.exists()

        on_disk = json.loads(patterns_file.read_text())
        assert len(on_disk["patterns"]) == 6
        assert "lastUpdated" in on_disk

    def test_seed_usage_counts_start_at_zero(self, pattern_library):
        assert all(p.usage_count == 0 for p in pattern_library.get_all())

    def test_corrupt_file_falls_back_to_seed(self, patterns_file):
        patterns_file.write_text("{not json")
        library = PatternLibrary(patterns_file).load()
        assert len(library) == 6
        # the corrupt file is replaced by the seed set
        assert json.loads(patterns_file.read_text())["patterns"][0]["id"] == "restaurant_kitchen"

    def test_wrong_shape_falls_back_to_seed(self, patterns_file):
        patterns_file.write_text(json.dumps({"patterns": [{"id": "x"}]}))
        assert len(PatternLibrary(patterns_file).load()) == 6

    @pytest.mark.parametrize("content", ["{}", '{"lastUpdated": 1}'])
    def test_missing_patterns_key_falls_back_to_seed(self, patterns_file, content):
        patterns_file.write_text(content)
        library = PatternLibrary(patterns_file).load()
        assert len(library) == 6
        assert len(json.loads(patterns_file.read_text())["patterns"]) == 6

    def test_reload_preserves_state(self, pattern_library, patterns_file):
        pattern_library.strengthen("ant_colony")
        added = pattern_library.add(BROKER_DRAFT)

        reloaded = PatternLibrary(patterns_file).load()
        assert len(reloaded) == 7
        assert reloaded.get("ant_colony").usage_count == 1
        assert reloaded.get(added.id).key_features == ["Sorting by destination", "Mailboxes as queues"]

    def test_unwritable_location_still_serves_seed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        library = PatternLibrary(blocker / "patterns.json").load()
        assert len(library) == 6
        assert library.save() is False

    def test_factory_loads(self, patterns_file):
        library = create_pattern_library(patterns_file)
        assert library.loaded
        assert "restaurant_kitchen" in library

    def test_save_leaves_no_temp_files(self, pattern_library, patterns_file):
        pattern_library.strengthen("supply_chain")
        assert [p.name for p in patterns_file.parent.iterdir()] == ["patterns.json"]


# =============================================================================
# Reads
# =============================================================================


class TestReads:
    def test_get_unknown_is_none(self, pattern_library):
        assert pattern_library.get("nope") is None

    def test_by_domain_is_case_insensitive_substring(self, pattern_library):
        ids = [p.id for p in pattern_library.get_by_domain("RESTAURANT")]
        assert ids == ["restaurant_kitchen", "restaurant_service"]

    def test_search_covers_features_and_problems(self, pattern_library):
        assert [p.id for p in pattern_library.search("pheromone")] == ["ant_colony"]
        assert [p.id for p in pattern_library.search("stockouts")] == ["supply_chain"]

    def test_search_ignores_solutions(self, pattern_library):
        # "Evaporative trails" only appears in ant_colony's typical solutions
        assert pattern_library.search("evaporative") == []

    def test_search_no_match(self, pattern_library):
        assert pattern_library.search("quantum") == []


# =============================================================================
# Writes
# =============================================================================


class TestWrites:
    def test_add_assigns_slug_and_timestamp_id(self, pattern_library, monkeypatch):
        monkeypatch.setattr(time, "time", lambda: 1700000000.5)
        pattern = pattern_library.add(BROKER_DRAFT)
        assert pattern.id == "post_office_1700000000500"
        assert pattern.usage_count == 0
        assert pattern.created == 1700000000.5

    def test_add_same_millisecond_gets_suffix(self, pattern_library, monkeypatch):
        monkeypatch.setattr(time, "time", lambda: 1700000000.0)
        first = pattern_library.add(BROKER_DRAFT)
        second = pattern_library.add(PatternDraft.model_validate(BROKER_DRAFT))
        assert first.id == "post_office_1700000000000"
        assert second.id == "post_office_1700000000000_2"

    def test_strengthen_increments_and_persists(self, pattern_library, patterns_file):
        assert pattern_library.strengthen("library_system") is True
        assert pattern_library.strengthen("library_system") is True
        on_disk = json.loads(patterns_file.read_text())
        counts = {p["id"]: p["usage_count"] for p in on_disk["patterns"]}
        assert counts["library_system"] == 2

    def test_strengthen_unknown_is_noop(self, pattern_library, patterns_file):
        before = patterns_file.read_text()
        assert pattern_library.strengthen("ghost") is False
        assert patterns_file.read_text() == before


class TestStats:
    def test_seeded_stats(self, pattern_library):
        stats = pattern_library.stats()
        assert stats["total"] == 6
        assert len(stats["most_used"]) == 5
        assert stats["domains"] == list(SEED_PATTERN_IDS)

    def test_most_used_ordering(self, pattern_library):
        for _ in range(3):
            pattern_library.strengthen("traffic_control")
        pattern_library.strengthen("ant_colony")
        most_used = pattern_library.stats()["most_used"]
        assert most_used[0] == {"id": "traffic_control", "source_domain": "traffic_control", "usage_count": 3}
        assert most_used[1]["id"] == "ant_colony"
