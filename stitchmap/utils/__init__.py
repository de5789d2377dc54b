"""StitchMap utilities."""

from .pattern_loader import load_pattern, find_pattern, get_available_patterns, PATTERNS_DIR

__all__ = ["load_pattern", "find_pattern", "get_available_patterns", "PATTERNS_DIR"]
