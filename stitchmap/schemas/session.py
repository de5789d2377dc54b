"""
Work session schemas for StitchMap.

Defines Pydantic models for tracking a user's place in a pattern:
- Position: the five-counter cursor (group, group repeat, entry, entry repeat, stitch)
- Session status lifecycle
- Work session state as persisted by the session store
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class SessionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class Position(BaseModel):
    """
    Cursor into a pattern. All counters are 0-based.

    (0, 0, 0, 0, 0) is the first stitch. group_index == len(groups) marks
    a pattern that has been worked to the end.
    """
    group_index: int = Field(default=0, ge=0)
    group_repeat: int = Field(default=0, ge=0)
    entry_index: int = Field(default=0, ge=0)
    entry_repeat: int = Field(default=0, ge=0)
    unit_count: int = Field(default=0, ge=0)

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        return (
            self.group_index,
            self.group_repeat,
            self.entry_index,
            self.entry_repeat,
            self.unit_count,
        )

    def is_at_start(self) -> bool:
        return self.as_tuple() == (0, 0, 0, 0, 0)

    def reset(self):
        self.group_index = 0
        self.group_repeat = 0
        self.entry_index = 0
        self.entry_repeat = 0
        self.unit_count = 0


class WorkSession(BaseModel):
    id: Optional[int] = None
    pattern_name: str
    position: Position = Field(default_factory=Position)
    status: SessionStatus = SessionStatus.ACTIVE
    started_at: datetime = Field(default_factory=datetime.now)
    last_activity_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
