"""
Progress calculation tests for StitchMap.
"""

import pytest

from stitchmap.schemas import Position, stitch_count
from stitchmap.tracker import (
    GroupStatus,
    InvalidPositionError,
    completed_units,
    compute_progress,
    step_backward,
    step_forward,
)


def walk_forward(position, pattern, steps):
    for _ in range(steps):
        step_forward(position, pattern)
    return position


class TestCounts:
    def test_at_start(self, simple_pattern):
        report = compute_progress(Position(), simple_pattern)
        assert report.completed_units == 0
        assert report.total_units == 6
        assert report.percentage == 0
        assert report.is_complete is False

    def test_midway(self, simple_pattern):
        position = walk_forward(Position(), simple_pattern, 3)
        report = compute_progress(position, simple_pattern)
        assert report.completed_units == 3
        assert report.percentage == 50.0

    def test_completed(self, complex_pattern):
        position = walk_forward(Position(), complex_pattern, 9)
        report = compute_progress(position, complex_pattern)
        assert report.completed_units == 9
        assert report.percentage == 100.0
        assert report.is_complete is True
        assert report.current_abbreviation == ""
        assert report.group_label == ""

    def test_empty_pattern(self, empty_pattern):
        report = compute_progress(Position(), empty_pattern)
        assert report.total_units == 0
        assert report.completed_units == 0
        assert report.percentage == 0.0
        assert report.is_complete is True
        assert report.current_abbreviation == ""
        assert report.groups == []

    def test_position_not_mutated(self, simple_pattern):
        position = walk_forward(Position(), simple_pattern, 2)
        compute_progress(position, simple_pattern)
        assert position.as_tuple() == (0, 0, 0, 0, 2)

    def test_invalid_position(self, simple_pattern):
        with pytest.raises(InvalidPositionError):
            compute_progress(Position(entry_index=4), simple_pattern)


class TestMonotonicProgress:
    """Each moving step changes completed_units by exactly one."""

    @pytest.mark.parametrize("fixture_name", [
        "complex_pattern",
        "empty_group_pattern",
        "group_repeat_pattern",
        "multi_entry_pattern",
    ])
    def test_forward_then_backward(self, fixture_name, request):
        pattern = request.getfixturevalue(fixture_name)
        total = stitch_count(pattern)
        position = Position()

        done = completed_units(position, pattern)
        for _ in range(total):
            step_forward(position, pattern)
            now = completed_units(position, pattern)
            assert now == done + 1
            done = now
        assert done == total

        while step_backward(position, pattern):
            now = completed_units(position, pattern)
            assert now == done - 1
            done = now
        assert done == 0

    def test_completed_units_match_step_count(self, complex_pattern):
        position = Position()
        for k in range(1, 10):
            step_forward(position, complex_pattern)
            assert completed_units(position, complex_pattern) == k


class TestLabels:
    def test_group_label_and_repeat_info(self, group_repeat_pattern):
        report = compute_progress(Position(), group_repeat_pattern)
        assert report.group_label == "Rounds 3-5"
        assert report.group_repeat_info == "Repeat 1 of 3"

    def test_no_repeat_info_for_single_repeat(self, simple_pattern):
        report = compute_progress(Position(), simple_pattern)
        assert report.group_label == "Round 1"
        assert report.group_repeat_info == ""

    def test_current_stitch(self, multi_entry_pattern):
        report = compute_progress(Position(), multi_entry_pattern)
        assert report.current_abbreviation == "MR"
        assert report.current_name == "Magic Ring"

    def test_previous_and_next_at_start(self, multi_entry_pattern):
        report = compute_progress(Position(), multi_entry_pattern)
        assert report.previous_abbreviation == ""
        assert report.next_abbreviation == "sc"

    def test_previous_and_next_across_groups(self, complex_pattern):
        # Last stitch of Round 1 (sc); previous is sc, next is Round 2's inc
        position = walk_forward(Position(), complex_pattern, 2)
        report = compute_progress(position, complex_pattern)
        assert report.current_abbreviation == "sc"
        assert report.previous_abbreviation == "sc"
        assert report.next_abbreviation == "inc"

        step_forward(position, complex_pattern)
        report = compute_progress(position, complex_pattern)
        assert report.current_abbreviation == "inc"
        assert report.previous_abbreviation == "sc"

    def test_next_on_last_stitch(self, complex_pattern):
        position = walk_forward(Position(), complex_pattern, 8)
        report = compute_progress(position, complex_pattern)
        assert report.current_abbreviation == "sc"
        assert report.next_abbreviation == ""

    def test_labels_skip_empty_group(self, empty_group_pattern):
        position = walk_forward(Position(), empty_group_pattern, 1)
        report = compute_progress(position, empty_group_pattern)
        assert report.next_abbreviation == "inc"

    def test_unsettled_start_reports_first_real_stitch(self, pattern_factory):
        pattern = pattern_factory(("Cast on", 1, []), ("Round 1", 1, [(4, 1, 1), (1, 2, 1)]))
        report = compute_progress(Position(), pattern)
        assert report.group_label == "Round 1"
        assert report.current_abbreviation == "MR"
        assert report.groups[0].status == GroupStatus.COMPLETED
        assert report.groups[1].status == GroupStatus.CURRENT


class TestGroupBreakdown:
    def test_status_at_start(self, complex_pattern):
        report = compute_progress(Position(), complex_pattern)
        assert [g.status for g in report.groups] == [
            GroupStatus.CURRENT,
            GroupStatus.UPCOMING,
            GroupStatus.UPCOMING,
        ]
        assert report.groups[1].completed_in_group == 0
        assert report.groups[0].current_repeat == 1
        assert report.groups[1].current_repeat == 0

    def test_status_middle_group(self, complex_pattern):
        position = walk_forward(Position(), complex_pattern, 3)
        report = compute_progress(position, complex_pattern)
        first, second, third = report.groups
        assert first.status == GroupStatus.COMPLETED
        assert first.completed_in_group == first.total_in_group == 3
        assert second.status == GroupStatus.CURRENT
        assert third.status == GroupStatus.UPCOMING

    def test_completed_in_group(self, simple_pattern):
        position = walk_forward(Position(), simple_pattern, 4)
        (group,) = compute_progress(position, simple_pattern).groups
        assert group.status == GroupStatus.CURRENT
        assert group.completed_in_group == 4
        assert group.total_in_group == 6

    def test_group_with_repeats(self, group_repeat_pattern):
        position = walk_forward(Position(), group_repeat_pattern, 2)
        (group,) = compute_progress(position, group_repeat_pattern).groups
        assert group.repeat_count == 3
        assert group.current_repeat == 2
        assert group.total_in_group == 6
        assert group.completed_in_group == 2

    def test_all_completed_at_end(self, empty_group_pattern):
        position = walk_forward(Position(), empty_group_pattern, 4)
        report = compute_progress(position, empty_group_pattern)
        assert all(g.status == GroupStatus.COMPLETED for g in report.groups)
        assert report.groups[1].total_in_group == 0

    def test_group_totals_sum_to_pattern_total(self, complex_pattern):
        report = compute_progress(Position(), complex_pattern)
        assert sum(g.total_in_group for g in report.groups) == report.total_units
