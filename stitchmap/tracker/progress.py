"""
Progress - Where a work session stands within its pattern.

Derives, without side effects:
- Completed / total stitch counts and percentage
- Current, previous and next stitch labels
- Per-group status breakdown for sidebar display
"""

from dataclasses import dataclass, field
from enum import Enum

from stitchmap.schemas import (
    InstructionGroup,
    Pattern,
    Position,
    group_stitch_count,
    stitch_count,
)

from .navigator import peek_backward, peek_forward, settle


class GroupStatus(str, Enum):
    """Group status relative to the current position."""
    COMPLETED = "completed"
    CURRENT = "current"
    UPCOMING = "upcoming"


@dataclass
class GroupProgress:
    """Progress within a single instruction group."""
    label: str
    repeat_count: int
    status: GroupStatus
    completed_in_group: int
    total_in_group: int
    current_repeat: int = 0  # 1-based, only set on the current group


@dataclass
class ProgressReport:
    """Everything a UI needs to show about a session's position."""
    completed_units: int
    total_units: int
    percentage: float
    is_complete: bool
    group_label: str = ""
    group_repeat_info: str = ""  # e.g. "Repeat 2 of 4"
    current_abbreviation: str = ""
    current_name: str = ""
    previous_abbreviation: str = ""
    next_abbreviation: str = ""
    groups: list[GroupProgress] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Counting
# -----------------------------------------------------------------------------

def _completed_in_current_group(position: Position, group: InstructionGroup) -> int:
    """Stitches done in the group the position is in: full repeats plus the partial one."""
    done = group_stitch_count(group) * position.group_repeat
    for ei, entry in enumerate(group.stitch_entries):
        if ei < position.entry_index:
            done += entry.count * entry.repeat_count
        elif ei == position.entry_index:
            done += entry.count * position.entry_repeat + position.unit_count
        else:
            break
    return done


def completed_units(position: Position, pattern: Pattern) -> int:
    """Number of stitches worked before the current position."""
    done = 0
    for gi, group in enumerate(pattern.instruction_groups):
        if gi < position.group_index:
            done += group_stitch_count(group) * group.repeat_count
        elif gi == position.group_index:
            done += _completed_in_current_group(position, group)
        else:
            break
    return done


def _abbreviation_at(position: Position, pattern: Pattern) -> str:
    group = pattern.instruction_groups[position.group_index]
    return pattern.abbreviation_for(group.stitch_entries[position.entry_index].stitch_id)


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------

def compute_progress(position: Position, pattern: Pattern) -> ProgressReport:
    """
    Compute progress for a position within a pattern.

    The position is not modified.

    Raises:
        InvalidPositionError: position does not fit the pattern
    """
    groups = pattern.instruction_groups
    current = position.model_copy()
    exhausted = settle(current, pattern)

    total = stitch_count(pattern)
    done = completed_units(current, pattern)

    report = ProgressReport(
        completed_units=done,
        total_units=total,
        percentage=done / total * 100 if total > 0 else 0.0,
        is_complete=exhausted,
    )

    if not exhausted:
        group = groups[current.group_index]
        entry = group.stitch_entries[current.entry_index]
        report.group_label = group.label
        if group.repeat_count > 1:
            report.group_repeat_info = f"Repeat {current.group_repeat + 1} of {group.repeat_count}"
        report.current_abbreviation = pattern.abbreviation_for(entry.stitch_id)
        report.current_name = pattern.name_for(entry.stitch_id)

        prev = peek_backward(current, pattern)
        if prev is not None:
            report.previous_abbreviation = _abbreviation_at(prev, pattern)
        nxt = peek_forward(current, pattern)
        if nxt is not None:
            report.next_abbreviation = _abbreviation_at(nxt, pattern)

    for gi, group in enumerate(groups):
        total_in_group = group_stitch_count(group) * group.repeat_count
        gp = GroupProgress(
            label=group.label,
            repeat_count=group.repeat_count,
            status=GroupStatus.UPCOMING,
            completed_in_group=0,
            total_in_group=total_in_group,
        )
        if gi < current.group_index:
            gp.status = GroupStatus.COMPLETED
            gp.completed_in_group = total_in_group
        elif gi == current.group_index:
            gp.status = GroupStatus.CURRENT
            gp.current_repeat = current.group_repeat + 1
            gp.completed_in_group = _completed_in_current_group(current, group)
        report.groups.append(gp)

    return report
