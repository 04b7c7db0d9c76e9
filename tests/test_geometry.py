# File: tests/test_geometry.py

"""Tests for bay geometry, tributary widths, counts and volumes.

Tests cover:
- Uniform and custom bays with proportional renormalisation
- Single-bay edits redistributed over the other bays
- Tributary width rules for interior and edge beams
- Joist, beam and column layouts and volumes
"""

import pytest

from mass_timber_designer.geometry import (
    BayGeometry, beam_layout, beam_volumes, column_volume, joist_layout, joist_volume,
    normalise_bays, redistribute_bays, tributary_width, uniform_bays,
)


# =============================================================================
# Bay widths
# =============================================================================


class TestUniformAndNormalise:

    def test_uniform(self) -> None:
        assert uniform_bays(20.0, 4) == [5.0, 5.0, 5.0, 5.0]
        assert uniform_bays(20.0, 0) == [20.0]

    def test_drifted_bays_rescaled(self) -> None:
        assert normalise_bays([6.0, 6.0, 6.0, 6.0], 20.0) == pytest.approx([5.0] * 4)

    def test_within_tolerance_unchanged(self) -> None:
        widths = [5.0, 5.0, 5.0, 5.005]
        assert normalise_bays(widths, 20.0) == widths

    def test_normalise_is_idempotent(self) -> None:
        once = normalise_bays([3.0, 7.0, 4.5], 12.0)
        assert normalise_bays(once, 12.0) == once

    def test_zero_widths_fall_back_to_uniform(self) -> None:
        assert normalise_bays([0.0, 0.0], 10.0) == [5.0, 5.0]


class TestRedistribute:

    def test_delta_shared_by_other_bays(self) -> None:
        assert redistribute_bays([5.0, 5.0, 5.0, 5.0], 0, 8.0, 20.0) == pytest.approx(
            [8.0, 4.0, 4.0, 4.0]
        )

    def test_proportional_to_current_widths(self) -> None:
        result = redistribute_bays([4.0, 4.0, 8.0, 4.0], 0, 6.0, 20.0)
        assert result == pytest.approx([6.0, 3.5, 7.0, 3.5])
        # Not the same as rescaling every bay
        assert result != pytest.approx(normalise_bays([6.0, 4.0, 8.0, 4.0], 20.0))

    def test_minimum_bay_width(self) -> None:
        result = redistribute_bays([10.0, 9.0, 1.0], 0, 17.0, 20.0)
        assert result == pytest.approx([17.0, 2.5, 0.5])
        assert sum(result) == pytest.approx(20.0)

    def test_edit_limited_to_leave_minimum_bays(self) -> None:
        assert redistribute_bays([10.0, 5.0, 5.0], 0, 25.0, 20.0) == pytest.approx(
            [19.0, 0.5, 0.5]
        )

    def test_max_width_cap(self) -> None:
        result = redistribute_bays([5.0, 5.0, 5.0, 5.0], 0, 12.0, 20.0, max_width=9.0)
        assert result[0] == 9.0
        assert sum(result) == pytest.approx(20.0)

    @pytest.mark.parametrize("widths, index, new_width", [
        ([5.0, 5.0, 5.0, 5.0], 1, 7.3),
        ([10.0, 9.0, 1.0], 0, 17.0),
        ([3.0, 4.0, 5.0], 2, 0.1),
        ([2.5, 7.5], 0, 30.0),
    ])
    def test_idempotent(self, widths, index, new_width) -> None:
        total = sum(widths)
        once = redistribute_bays(widths, index, new_width, total)
        assert redistribute_bays(once, index, new_width, total) == once

    def test_single_bay(self) -> None:
        assert redistribute_bays([12.0], 0, 5.0, 12.0) == [12.0]

    def test_bad_index(self) -> None:
        with pytest.raises(IndexError):
            redistribute_bays([5.0, 5.0], 2, 4.0, 10.0)


class TestBayGeometry:

    @pytest.fixture
    def bays(self):
        return BayGeometry.uniform(20.0, 12.0, 4, 3)

    def test_averages(self, bays) -> None:
        assert bays.avg_bay_length == 5.0
        assert bays.avg_bay_width == 4.0
        assert bays.tributary_area == 20.0
        assert bays.grid_points == 20

    def test_spans_follow_joist_direction(self, bays) -> None:
        assert bays.joist_span(True) == 4.0
        assert bays.beam_span(True) == 5.0
        assert bays.joist_span(False) == 5.0
        assert bays.beam_span(False) == 4.0

    def test_custom_bays_renormalised(self) -> None:
        bays = BayGeometry.custom(20.0, 15.0, [6.0, 6.0, 6.0, 6.0], [5.0, 5.0, 5.0])
        assert bays.lengthwise_bays == pytest.approx((5.0, 5.0, 5.0, 5.0))
        assert bays.widthwise_bays == (5.0, 5.0, 5.0)

    def test_custom_spans_use_largest_bay(self) -> None:
        bays = BayGeometry.custom(20.0, 15.0, [8.0, 12.0], [5.0, 10.0])
        assert bays.beam_span(True) == 12.0
        assert bays.joist_span(True) == 10.0

    def test_custom_one_axis_keeps_uniform_other(self) -> None:
        bays = BayGeometry.custom(20.0, 15.0, [5.0, 15.0], None, widthwise_count=3)
        assert bays.lengthwise_bays == (5.0, 15.0)
        assert bays.widthwise_bays == (5.0, 5.0, 5.0)


class TestTributaryWidth:

    def test_interior_takes_full_bay(self) -> None:
        assert tributary_width(5.0, 6.0, True, edge=False) == 5.0
        assert tributary_width(5.0, 6.0, False, edge=False) == 6.0

    def test_edge_takes_half_bay(self) -> None:
        assert tributary_width(5.0, 6.0, True, edge=True) == 2.5
        assert tributary_width(5.0, 6.0, False, edge=True) == 3.0

    def test_missing_dimensions(self) -> None:
        assert tributary_width(None, None, True, edge=False) == 5.0
        assert tributary_width(None, None, True, edge=True) == 2.5


# =============================================================================
# Layouts and volumes
# =============================================================================


class TestVolumes:

    @pytest.fixture
    def bays(self):
        return BayGeometry.uniform(20.0, 15.0, 4, 3)

    def test_joist_layout(self) -> None:
        layout = joist_layout(20.0, 15.0, 500, True)
        assert (layout.count, layout.run_length) == (40, 15.0)
        layout = joist_layout(20.0, 15.0, 500, False)
        assert (layout.count, layout.run_length) == (30, 20.0)

    def test_joist_count_rounds_up(self) -> None:
        assert joist_layout(20.2, 15.0, 500, True).count == 41

    def test_joist_volume(self) -> None:
        assert joist_volume(120, 410, 20.0, 15.0, 500, True) == pytest.approx(
            0.12 * 0.41 * 15.0 * 40
        )

    def test_beams_only_perpendicular_to_joists(self, bays) -> None:
        layout = beam_layout(20.0, 15.0, bays, True)
        assert (layout.lines, layout.line_length, layout.segments) == (4, 20.0, 4)
        assert (layout.interior_lines, layout.edge_lines, layout.count) == (2, 2, 16)
        layout = beam_layout(20.0, 15.0, bays, False)
        assert (layout.lines, layout.line_length, layout.segments) == (5, 15.0, 3)

    def test_beam_volumes(self, bays) -> None:
        interior, edge = beam_volumes((205, 335), (165, 270), 20.0, 15.0, bays, True)
        assert interior == pytest.approx(0.205 * 0.335 * 20.0 * 2)
        assert edge == pytest.approx(0.165 * 0.27 * 20.0 * 2)

    def test_single_widthwise_bay_has_no_interior_beams(self) -> None:
        bays = BayGeometry.uniform(20.0, 8.0, 4, 1)
        interior, edge = beam_volumes((205, 335), (165, 270), 20.0, 8.0, bays, True)
        assert interior == 0.0
        assert edge > 0.0

    def test_column_volume_full_height(self, bays) -> None:
        assert column_volume(205, 270, 3.0, 4, bays) == pytest.approx(
            0.205 * 0.27 * 12.0 * 20
        )
