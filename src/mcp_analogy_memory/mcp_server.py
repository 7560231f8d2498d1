#!/usr/bin/env python3
"""FastMCP server for the analogy memory engine.

Native MCP protocol implementation using FastMCP with Pydantic-validated
tool inputs.  Each tool handler constructs an input model for validation;
required-field and enum checks live in the models, domain logic lives in
the service layer.
"""

import json
import logging
import os
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from fastmcp import Context, FastMCP
from pydantic import ValidationError

from . import __version__
from .config import settings
from .graph.concept_graph import ConceptGraph
from .graph.factory import create_concept_graph
from .models.mcp_inputs import AnalogyParams, ConceptGraphParams, PatternLibraryParams
from .services.analogy_service import AnalogyService
from .services.concept_service import ConceptService
from .services.pattern_service import PatternService
from .storage.factory import create_pattern_library
from .storage.pattern_library import PatternLibrary

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _inject_latency(response: dict[str, Any], start: float) -> dict[str, Any]:
    """Add 'latency_ms' to a response if latency metrics are enabled."""
    if not settings.debug.latency_metrics:
        return response
    response["latency_ms"] = round((time.perf_counter() - start) * 1000, 1)
    return response


def _validation_error(e: ValidationError) -> dict[str, Any]:
    """Wire format for rejected tool input."""
    return {"success": False, "error": "Validation error", "details": json.loads(e.json(include_url=False))}


@dataclass
class MCPServerContext:
    """Application context for the MCP server with all required components."""

    pattern_library: PatternLibrary
    concept_graph: ConceptGraph
    analogy_service: AnalogyService
    concept_service: ConceptService
    pattern_service: PatternService


@asynccontextmanager
async def mcp_server_lifespan(server: FastMCP) -> AsyncIterator[MCPServerContext]:
    """Build the stores and services once per server lifetime."""
    pattern_library = create_pattern_library()
    concept_graph = create_concept_graph()

    try:
        yield MCPServerContext(
            pattern_library=pattern_library,
            concept_graph=concept_graph,
            analogy_service=AnalogyService(pattern_library),
            concept_service=ConceptService(concept_graph),
            pattern_service=PatternService(pattern_library),
        )
    finally:
        # The concept graph is in-memory only and is discarded here
        logger.info(f"Shutting down MCP Analogy Memory ({concept_graph!r} discarded)")


# Create FastMCP server instance
mcp = FastMCP("MCP Analogy Memory", lifespan=mcp_server_lifespan)


# =============================================================================
# ANALOGY SYNTHESIS
# =============================================================================


@mcp.tool()
async def analogy_synthesizer(
    problem_description: str,
    ctx: Context,
    source_domains: str | list[str] | None = None,
    abstraction_level: str = "deep",
    max_results: int | None = None,
) -> dict[str, Any]:
    """Find structural analogies for a problem in unrelated domains.

    The problem's structure (key terms, relationship tags, constraint tags)
    is matched against a library of patterns such as restaurant kitchens,
    ant colonies and supply chains.  A confident best match is reinforced.

    Args:
        problem_description: The problem to solve, in plain text
        source_domains: Restrict candidates to domains containing any of
            these substrings; accepts ["kitchen", "ant"] or "kitchen,ant"
        abstraction_level: "shallow" (lenient scoring) or "deep" (conservative)
        max_results: Number of analogies to return (1-10, default 3)

    Returns:
        {problem_analyzed, extracted_structure, analogies, best_analogy,
        abstraction_level, reinforced}
    """
    _t0 = time.perf_counter()

    try:
        params = AnalogyParams(
            problem_description=problem_description,
            source_domains=source_domains,
            abstraction_level=abstraction_level,
            max_results=max_results,
        )
    except ValidationError as e:
        return _inject_latency(_validation_error(e), _t0)

    analogy_service = ctx.request_context.lifespan_context.analogy_service
    result = analogy_service.synthesize(
        problem_description=params.problem_description,
        source_domains=params.source_domains,
        abstraction_level=params.abstraction_level,
        max_results=params.max_results,
    )
    return _inject_latency(result.model_dump(), _t0)


# =============================================================================
# CONCEPT GRAPH OPERATIONS
# =============================================================================


@mcp.tool()
async def concept_web_weaver(
    action: str,
    ctx: Context,
    concept: str | None = None,
    relationships: list[dict[str, str]] | None = None,
    query_type: str = "neighbors",
    target_concept: str | None = None,
    relationship_type: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Maintain a graph of interconnected concepts that grows stronger with use.

    Args:
        action: Operation to perform:
            - "register": Add or update a concept with optional relationships
            - "query": Inspect a concept (see query_type)
            - "strengthen": Reinforce a concept after successful use
            - "traverse": Shortest path from concept to target_concept
            - "stats": Graph statistics
            - "list": All registered concepts
            - "by_relationship": All edges of relationship_type, strongest first
        concept: Concept name (register, query, strengthen, traverse)
        relationships: [{"type": ..., "target": ...}] for register. Types:
            "depends_on", "implements", "generalizes", "conflicts_with"
        query_type: "neighbors" (reinforces the edges it returns),
            "dependents", "path" (requires target_concept) or "impact"
        target_concept: Destination for traverse and path queries
        relationship_type: Edge type for strengthen and by_relationship
        metadata: JSON data to merge into the concept (register)

    Returns:
        Action-specific payload.  Unknown concepts yield found=false with
        empty results; unreachable paths yield path=null and a message.
    """
    _t0 = time.perf_counter()

    try:
        params = ConceptGraphParams(
            action=action,
            concept=concept,
            relationships=relationships or [],
            query_type=query_type,
            target_concept=target_concept,
            relationship_type=relationship_type,
            metadata=metadata,
        )
    except ValidationError as e:
        return _inject_latency(_validation_error(e), _t0)

    concept_service = ctx.request_context.lifespan_context.concept_service
    return _inject_latency(concept_service.handle(params), _t0)


# =============================================================================
# PATTERN LIBRARY OPERATIONS
# =============================================================================


@mcp.tool()
async def pattern_library(
    action: str,
    ctx: Context,
    pattern_id: str | None = None,
    keyword: str | None = None,
    domain: str | None = None,
    pattern: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Browse, search, extend and reinforce the library of structural patterns.

    Args:
        action: Operation to perform:
            - "list": Every pattern
            - "get": One pattern by pattern_id
            - "search": Substring search over domain, structure, features, problems
            - "by_domain": Patterns whose domain contains domain
            - "add": Store a new pattern (requires pattern)
            - "strengthen": Bump a pattern's usage count
            - "stats": Totals, most used patterns and domains
        pattern_id: Pattern identifier (get, strengthen)
        keyword: Search term (search)
        domain: Domain substring (by_domain)
        pattern: {source_domain, abstract_structure, key_features,
            common_problems, typical_solutions, relationships} (add)

    Returns:
        Action-specific payload; lookups of unknown ids yield found=false.
    """
    _t0 = time.perf_counter()

    try:
        params = PatternLibraryParams(
            action=action,
            pattern_id=pattern_id,
            keyword=keyword,
            domain=domain,
            pattern=pattern,
        )
    except ValidationError as e:
        return _inject_latency(_validation_error(e), _t0)

    pattern_service = ctx.request_context.lifespan_context.pattern_service
    return _inject_latency(pattern_service.handle(params), _t0)


# =============================================================================
# HEALTH
# =============================================================================


@mcp.tool()
async def check_health(ctx: Context) -> dict[str, Any]:
    """Report pattern library and concept graph statistics.

    Returns:
        {status, version, patterns, concept_graph, storage_path}
    """
    _t0 = time.perf_counter()
    app = ctx.request_context.lifespan_context
    graph_stats = app.concept_graph.stats()
    result = {
        "status": "healthy",
        "version": __version__,
        "patterns": app.pattern_library.stats(),
        "concept_graph": {
            "total_concepts": graph_stats.node_count,
            "total_relationships": graph_stats.edge_count,
            "average_connection_strength": round(graph_stats.avg_strength, 2),
        },
        "storage_path": str(app.pattern_library.storage_path),
    }
    return _inject_latency(result, _t0)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main():
    """Main entry point for the MCP server."""
    port = int(os.getenv("MCP_SERVER_PORT", "8000"))
    host = os.getenv("MCP_SERVER_HOST", "0.0.0.0")
    transport_mode = os.getenv("MCP_TRANSPORT_MODE", "http")

    logger.info(f"Starting MCP Analogy Memory server ({transport_mode}) on {host}:{port}")
    logger.info(f"Pattern file: {settings.paths.patterns_file}")

    if transport_mode == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="http", host=host, port=port, stateless_http=True)


if __name__ == "__main__":
    main()
