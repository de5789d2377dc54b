"""
Navigator - Stitch-by-stitch movement through a pattern.

Provides:
- step_forward / step_backward: move a Position by exactly one stitch
- peek_forward / peek_backward: the same moves on a copy
- settle: move a fresh Position off leading empty groups

A Position is a mixed-radix counter. Going forward carries from the
innermost counter outwards:

    unit_count -> entry_repeat -> entry_index -> group_repeat -> group_index

Going backward borrows in the same order and re-seats every inner counter
at its last value (bound - 1) for the group or entry it lands on.

All functions are pure over (Position, Pattern): nothing is cached and
the Pattern is never modified.
"""

from typing import Optional

from stitchmap.schemas import InstructionGroup, Pattern, Position


class InvalidPositionError(RuntimeError):
    """Position does not fit the pattern it is being moved through."""


# -----------------------------------------------------------------------------
# Invariant checking
# -----------------------------------------------------------------------------

def _check_position(position: Position, groups: list[InstructionGroup]):
    gi = position.group_index
    if gi > len(groups):
        raise InvalidPositionError(
            f"group_index {gi} is beyond the end of a {len(groups)}-group pattern"
        )
    if gi == len(groups):
        return  # worked to the end; inner counters are ignored

    group = groups[gi]
    if not group.stitch_entries:
        # Only a position not yet settled (inner counters zero) may sit in an empty group
        if position.as_tuple()[1:] != (0, 0, 0, 0):
            raise InvalidPositionError(f"Position {position.as_tuple()} rests inside empty group {gi}")
        return

    if position.entry_index >= len(group.stitch_entries):
        raise InvalidPositionError(
            f"entry_index {position.entry_index} out of range for group {gi} "
            f"({len(group.stitch_entries)} entries)"
        )
    if position.group_repeat >= group.repeat_count:
        raise InvalidPositionError(
            f"group_repeat {position.group_repeat} >= repeat_count {group.repeat_count} in group {gi}"
        )
    entry = group.stitch_entries[position.entry_index]
    if position.entry_repeat >= entry.repeat_count:
        raise InvalidPositionError(
            f"entry_repeat {position.entry_repeat} >= repeat_count {entry.repeat_count}"
        )
    if position.unit_count >= entry.count:
        raise InvalidPositionError(
            f"unit_count {position.unit_count} >= count {entry.count}"
        )


# -----------------------------------------------------------------------------
# Carry (forward)
# -----------------------------------------------------------------------------

def _skip_empty_groups(position: Position, groups: list[InstructionGroup]) -> bool:
    """Move past empty groups. Returns True if that runs off the end."""
    while position.group_index < len(groups) and not groups[position.group_index].stitch_entries:
        position.group_index += 1
    return position.group_index >= len(groups)


def _advance_group(position: Position, groups: list[InstructionGroup]) -> bool:
    position.group_index += 1
    position.group_repeat = 0
    position.entry_index = 0
    position.entry_repeat = 0
    position.unit_count = 0
    return _skip_empty_groups(position, groups)


def settle(position: Position, pattern: Pattern) -> bool:
    """
    Move a position resting in an empty group onto the next non-empty group.

    Only the start position can rest in an empty group (when the pattern
    opens with one). Settling does not count as a stitch.

    Returns:
        True if no stitch remains (the pattern is exhausted)
    """
    groups = pattern.instruction_groups
    _check_position(position, groups)
    if position.group_index >= len(groups):
        return True
    return _skip_empty_groups(position, groups)


def step_forward(position: Position, pattern: Pattern) -> bool:
    """
    Advance one stitch, mutating position in place.

    Returns:
        True if the pattern is now fully worked. Calling again after that
        keeps returning True without moving.

    Raises:
        InvalidPositionError: position does not fit the pattern
    """
    if settle(position, pattern):
        return True

    group = pattern.instruction_groups[position.group_index]
    entry = group.stitch_entries[position.entry_index]

    position.unit_count += 1
    if position.unit_count < entry.count:
        return False

    position.unit_count = 0
    position.entry_repeat += 1
    if position.entry_repeat < entry.repeat_count:
        return False

    position.entry_repeat = 0
    position.entry_index += 1
    if position.entry_index < len(group.stitch_entries):
        return False

    position.entry_index = 0
    position.group_repeat += 1
    if position.group_repeat < group.repeat_count:
        return False

    return _advance_group(position, pattern.instruction_groups)


# -----------------------------------------------------------------------------
# Borrow (backward)
# -----------------------------------------------------------------------------

def _seat_at_last_entry(position: Position, group: InstructionGroup):
    """Point at the last stitch of the last entry of the current group repeat."""
    last_entry = group.stitch_entries[-1]
    position.entry_index = len(group.stitch_entries) - 1
    position.entry_repeat = last_entry.repeat_count - 1
    position.unit_count = last_entry.count - 1


def _retreat_to_previous_group(position: Position, groups: list[InstructionGroup]) -> bool:
    for gi in range(position.group_index - 1, -1, -1):
        group = groups[gi]
        if not group.stitch_entries:
            continue
        position.group_index = gi
        position.group_repeat = group.repeat_count - 1
        _seat_at_last_entry(position, group)
        return True
    return False


def step_backward(position: Position, pattern: Pattern) -> bool:
    """
    Retreat one stitch, mutating position in place.

    From a worked-to-the-end position this lands on the last stitch of the
    last non-empty group.

    Returns:
        False (and leaves position alone) if already on the first stitch

    Raises:
        InvalidPositionError: position does not fit the pattern
    """
    groups = pattern.instruction_groups
    _check_position(position, groups)

    if position.is_at_start():
        return False

    if position.group_index < len(groups) and groups[position.group_index].stitch_entries:
        group = groups[position.group_index]

        if position.unit_count > 0:
            position.unit_count -= 1
            return True

        if position.entry_repeat > 0:
            position.entry_repeat -= 1
            entry = group.stitch_entries[position.entry_index]
            position.unit_count = entry.count - 1
            return True

        if position.entry_index > 0:
            position.entry_index -= 1
            entry = group.stitch_entries[position.entry_index]
            position.entry_repeat = entry.repeat_count - 1
            position.unit_count = entry.count - 1
            return True

        if position.group_repeat > 0:
            position.group_repeat -= 1
            _seat_at_last_entry(position, group)
            return True

    return _retreat_to_previous_group(position, groups)


# -----------------------------------------------------------------------------
# Peeking
# -----------------------------------------------------------------------------

def peek_forward(position: Position, pattern: Pattern) -> Optional[Position]:
    """Position of the next stitch, or None if the current one is the last."""
    nxt = position.model_copy()
    if step_forward(nxt, pattern):
        return None
    return nxt


def peek_backward(position: Position, pattern: Pattern) -> Optional[Position]:
    """Position of the previous stitch, or None on the first stitch."""
    prev = position.model_copy()
    if not step_backward(prev, pattern):
        return None
    return prev
