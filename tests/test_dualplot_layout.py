from __future__ import annotations

import unittest

from dualplot.layout import axis_value_anchor, center_anchor, grid_positions, plot_rect, saturating_sub
from dualplot.styles import AxisType


class LayoutTests(unittest.TestCase):
    def test_saturating_sub_floors_at_zero(self) -> None:
        self.assertEqual(saturating_sub(10, 3), 7)
        self.assertEqual(saturating_sub(3, 10), 0)

    def test_center_anchor_centers_box_on_point(self) -> None:
        self.assertEqual(center_anchor(100, 50, 40, 10), (80, 45))

    def test_center_anchor_uses_floor_half_of_odd_sizes(self) -> None:
        self.assertEqual(center_anchor(100, 50, 41, 11), (80, 45))

    def test_center_anchor_never_goes_negative_near_origin(self) -> None:
        self.assertEqual(center_anchor(5, 3, 40, 10), (0, 0))
        self.assertEqual(center_anchor(5, 300, 40, 10), (0, 295))

    def test_x_axis_value_sits_below_tick(self) -> None:
        self.assertEqual(axis_value_anchor(100, 50, 40, 10, AxisType.AXIS_X), (80, 60))

    def test_y_axis_value_sits_left_of_tick(self) -> None:
        self.assertEqual(axis_value_anchor(100, 50, 40, 10, AxisType.AXIS_Y), (60, 45))

    def test_axis_value_anchor_saturates(self) -> None:
        self.assertEqual(axis_value_anchor(3, 2, 40, 10, AxisType.AXIS_Y), (0, 0))
        self.assertEqual(axis_value_anchor(3, 2, 40, 10, AxisType.AXIS_X), (0, 12))

    def test_grid_positions_are_even_interior_lines(self) -> None:
        self.assertEqual(grid_positions(20, 160, 3), [60, 100, 140])

    def test_grid_positions_absorb_remainder_in_last_interval(self) -> None:
        positions = grid_positions(0, 10, 3)
        self.assertEqual(positions, [2, 4, 6])
        self.assertEqual(10 - positions[-1], 4)

    def test_grid_positions_stay_strictly_inside_extent(self) -> None:
        for count in range(1, 30):
            positions = grid_positions(7, 97, count)
            self.assertEqual(len(positions), count)
            self.assertEqual(len(set(positions)), count)
            self.assertTrue(all(7 < p < 7 + 97 for p in positions))

    def test_grid_positions_empty_for_zero_count_or_tiny_extent(self) -> None:
        self.assertEqual(grid_positions(0, 100, 0), [])
        self.assertEqual(grid_positions(0, 3, 5), [])

    def test_plot_rect_is_margin_bounded(self) -> None:
        self.assertEqual(plot_rect(200, 100, 10), (10, 10, 190, 90))


if __name__ == "__main__":
    unittest.main()
