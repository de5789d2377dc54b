"""
Shared pattern fixtures for tracker tests.

Stitch ids: 1 = sc, 4 = MR, 5 = inc.
"""

import pytest

from stitchmap.schemas import InstructionGroup, Pattern, PatternStitch, StitchEntry


STITCHES = [
    PatternStitch(id=1, abbreviation="sc", name="Single Crochet"),
    PatternStitch(id=4, abbreviation="MR", name="Magic Ring"),
    PatternStitch(id=5, abbreviation="inc", name="Increase"),
]


def build_pattern(*groups) -> Pattern:
    """
    Build a pattern from (label, repeat_count, [(stitch_id, count, repeat_count), ...]).
    """
    return Pattern(
        name="Test Pattern",
        stitches=STITCHES,
        instruction_groups=[
            InstructionGroup(
                label=label,
                repeat_count=repeat,
                stitch_entries=[
                    StitchEntry(stitch_id=sid, count=count, repeat_count=entry_repeat)
                    for sid, count, entry_repeat in entries
                ],
            )
            for label, repeat, entries in groups
        ],
    )


@pytest.fixture
def pattern_factory():
    return build_pattern


@pytest.fixture
def simple_pattern():
    """Round 1: 6 sc"""
    return build_pattern(("Round 1", 1, [(1, 6, 1)]))


@pytest.fixture
def multi_entry_pattern():
    """Round 1: MR, 6 sc"""
    return build_pattern(("Round 1", 1, [(4, 1, 1), (1, 6, 1)]))


@pytest.fixture
def repeat_entry_pattern():
    """Round 2: inc x6"""
    return build_pattern(("Round 2", 1, [(5, 1, 6)]))


@pytest.fixture
def group_repeat_pattern():
    """Rounds 3-5 (x3): 2 sc"""
    return build_pattern(("Rounds 3-5", 3, [(1, 2, 1)]))


@pytest.fixture
def multi_group_pattern():
    """Round 1: 3 sc / Round 2: inc x3"""
    return build_pattern(
        ("Round 1", 1, [(1, 3, 1)]),
        ("Round 2", 1, [(5, 1, 3)]),
    )


@pytest.fixture
def complex_pattern():
    """
    Round 1: MR, 2 sc         (3 stitches)
    Round 2: inc x2           (2 stitches)
    Round 3 (x2): 2 sc        (4 stitches)
    Total: 9 stitches
    """
    return build_pattern(
        ("Round 1", 1, [(4, 1, 1), (1, 2, 1)]),
        ("Round 2", 1, [(5, 1, 2)]),
        ("Round 3", 2, [(1, 2, 1)]),
    )


@pytest.fixture
def empty_group_pattern():
    """Round 1: 2 sc / Stuffing (no stitches) / Round 2: inc x2"""
    return build_pattern(
        ("Round 1", 1, [(1, 2, 1)]),
        ("Stuffing", 2, []),
        ("Round 2", 1, [(5, 1, 2)]),
    )


@pytest.fixture
def empty_pattern():
    return Pattern(name="Empty")
