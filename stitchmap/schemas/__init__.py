"""
StitchMap Schemas - Pydantic models for pattern tracking.

This module exports all schema classes for:
- Pattern: stitch library, stitch entries, instruction groups
- Session: position cursor and work session state
"""

# Pattern schemas
from .pattern import (
    PatternType,
    PatternStitch,
    StitchEntry,
    InstructionGroup,
    Pattern,
    group_stitch_count,
    stitch_count,
)

# Session schemas
from .session import (
    SessionStatus,
    Position,
    WorkSession,
)

__all__ = [
    # Pattern
    'PatternType',
    'PatternStitch',
    'StitchEntry',
    'InstructionGroup',
    'Pattern',
    'group_stitch_count',
    'stitch_count',
    # Session
    'SessionStatus',
    'Position',
    'WorkSession',
]
