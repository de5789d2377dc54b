"""
Pattern schemas for StitchMap.

Defines Pydantic models for a crochet pattern:
- Stitch library (abbreviation + name per stitch used in the pattern)
- Stitch entries (count x repeat of one stitch)
- Instruction groups (a round or row, repeated as a block)

Patterns are read-only once loaded; navigation never mutates them.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from enum import Enum


class PatternType(str, Enum):
    ROUND = "round"
    ROW = "row"


class PatternStitch(BaseModel):
    """A stitch available to this pattern (e.g. sc / Single Crochet)."""
    id: int
    abbreviation: str
    name: str = ""


class StitchEntry(BaseModel):
    """
    One stitch instruction inside a group.

    "inc x6" is count=1, repeat_count=6; "6 sc" is count=6, repeat_count=1.
    """
    stitch_id: int
    count: int = Field(default=1, ge=1)          # stitches per repeat
    repeat_count: int = Field(default=1, ge=1)
    into_stitch: Optional[str] = None


class InstructionGroup(BaseModel):
    label: str
    repeat_count: int = Field(default=1, ge=1)
    stitch_entries: list[StitchEntry] = []       # empty groups are skipped by navigation
    expected_count: Optional[int] = Field(default=None, ge=0)
    notes: str = ""


class Pattern(BaseModel):
    """Complete pattern: stitch library plus ordered instruction groups."""
    name: str
    description: str = ""
    pattern_type: PatternType = PatternType.ROUND
    hook_size: str = ""
    yarn_weight: str = ""
    difficulty: str = ""
    stitches: list[PatternStitch] = []
    instruction_groups: list[InstructionGroup] = []

    @model_validator(mode="after")
    def stitch_ids_known(self):
        known = {s.id for s in self.stitches}
        for group in self.instruction_groups:
            for entry in group.stitch_entries:
                if entry.stitch_id not in known:
                    raise ValueError(
                        f"Group '{group.label}' references unknown stitch id {entry.stitch_id}"
                    )
        return self

    def abbreviation_for(self, stitch_id: int) -> str:
        for stitch in self.stitches:
            if stitch.id == stitch_id:
                return stitch.abbreviation
        return ""

    def name_for(self, stitch_id: int) -> str:
        for stitch in self.stitches:
            if stitch.id == stitch_id:
                return stitch.name
        return ""


# -----------------------------------------------------------------------------
# Stitch counting
# -----------------------------------------------------------------------------

def group_stitch_count(group: InstructionGroup) -> int:
    """Stitches in a single iteration of a group (not multiplied by its repeat)."""
    return sum(e.count * e.repeat_count for e in group.stitch_entries)


def stitch_count(pattern: Pattern) -> int:
    """Total stitches in the pattern, all group repeats included."""
    return sum(group_stitch_count(g) * g.repeat_count for g in pattern.instruction_groups)
