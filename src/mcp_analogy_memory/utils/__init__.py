"""Text analysis helpers for structure extraction, scoring and mapping."""
