"""
StitchMap Tracker - Runtime components for working through a pattern.

This module provides:
- Navigator functions: stitch-by-stitch movement
- Progress: completed counts, labels, group breakdown
- SessionStore: persist work sessions
- WorkSessionService: session lifecycle
"""

from .navigator import (
    InvalidPositionError,
    settle,
    step_forward,
    step_backward,
    peek_forward,
    peek_backward,
)

from .progress import (
    GroupStatus,
    GroupProgress,
    ProgressReport,
    completed_units,
    compute_progress,
)

from .store import (
    SessionStore,
    SessionNotFoundError,
    DEFAULT_STITCHMAP_DIR,
    DEFAULT_SESSIONS_DB,
)

from .session import (
    WorkSessionService,
    SessionError,
)

__all__ = [
    # Navigator
    "InvalidPositionError",
    "settle",
    "step_forward",
    "step_backward",
    "peek_forward",
    "peek_backward",
    # Progress
    "GroupStatus",
    "GroupProgress",
    "ProgressReport",
    "completed_units",
    "compute_progress",
    # Store
    "SessionStore",
    "SessionNotFoundError",
    "DEFAULT_STITCHMAP_DIR",
    "DEFAULT_SESSIONS_DB",
    # Session
    "WorkSessionService",
    "SessionError",
]
