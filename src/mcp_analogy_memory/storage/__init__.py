"""Pattern library persistence."""

from .factory import create_pattern_library
from .pattern_library import PatternLibrary

__all__ = ["PatternLibrary", "create_pattern_library"]
