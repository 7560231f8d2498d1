"""MCP Analogy Memory - concept graph and cross-domain analogy engine."""

__version__ = "0.1.0"
