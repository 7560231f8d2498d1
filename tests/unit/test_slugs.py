"""Tests for slug generation."""

from mcp_analogy_memory.utils.slugs import slugify


def test_lowercases_and_joins_whitespace():
    assert slugify("Session Storage") == "session_storage"


def test_whitespace_runs_collapse():
    assert slugify("a \t  b") == "a_b"


def test_punctuation_stripped_after_whitespace_mapping():
    assert slugify("auth-middleware (v2)") == "authmiddleware_v2"


def test_is_idempotent():
    assert slugify(slugify("Restaurant Kitchen!")) == "restaurant_kitchen"
