"""Pydantic models for patterns, tool inputs and service responses."""
