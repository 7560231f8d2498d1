"""
Pattern Service - request handling for the pattern library.

Browse, search, extend and reinforce the library of structural patterns.
Patterns are returned whole (``model_dump()``), in library order.
"""

import logging
from typing import Any

from ..models.mcp_inputs import PatternLibraryParams
from ..models.pattern import Pattern
from ..storage.pattern_library import PatternLibrary

logger = logging.getLogger(__name__)


def _dump(patterns: list[Pattern]) -> list[dict[str, Any]]:
    return [p.model_dump() for p in patterns]


class PatternService:
    """Dispatches pattern library actions."""

    def __init__(self, pattern_library: PatternLibrary):
        self.pattern_library = pattern_library

    def handle(self, params: PatternLibraryParams) -> dict[str, Any]:
        """Run one validated request and return its response payload."""
        lib = self.pattern_library
        action = params.action

        if action == "list":
            patterns = lib.get_all()
            return {"patterns": _dump(patterns), "count": len(patterns)}

        if action == "get":
            pattern = lib.get(params.pattern_id)
            if pattern is None:
                return {"found": False, "pattern_id": params.pattern_id, "pattern": None}
            return {"found": True, "pattern_id": pattern.id, "pattern": pattern.model_dump()}

        if action == "search":
            patterns = lib.search(params.keyword)
            return {"keyword": params.keyword, "patterns": _dump(patterns), "count": len(patterns)}

        if action == "by_domain":
            patterns = lib.get_by_domain(params.domain)
            return {"domain": params.domain, "patterns": _dump(patterns), "count": len(patterns)}

        if action == "add":
            pattern = lib.add(params.pattern)
            return {"success": True, "pattern_id": pattern.id, "pattern": pattern.model_dump()}

        if action == "strengthen":
            ok = lib.strengthen(params.pattern_id)
            pattern = lib.get(params.pattern_id)
            return {
                "success": ok,
                "found": ok,
                "pattern_id": params.pattern_id,
                "usage_count": pattern.usage_count if pattern is not None else None,
            }

        return {"statistics": lib.stats(), "storage_path": str(lib.storage_path)}
