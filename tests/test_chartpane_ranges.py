from __future__ import annotations

import math
import unittest

import numpy as np

from chartpane.context import PaneContext
from chartpane.curves import CurveList
from chartpane.ranges import compute_range, series_extent
from chartpane.scales import AxisBounds
from chartpane.series import Series, SeriesData


def _series(
    y: list[float],
    *,
    x: list[float] | None = None,
    kind: str = "line",
    is_y2_axis: bool = False,
) -> Series:
    ys = np.asarray(y, dtype=np.float64)
    xs = np.arange(1, ys.size + 1, dtype=np.float64) if x is None else np.asarray(x, dtype=np.float64)
    return Series(data=SeriesData(x=xs, y=ys), kind=kind, is_y2_axis=is_y2_axis)  # type: ignore[arg-type]


class ComputeRangeTests(unittest.TestCase):
    def test_empty_collection_uses_default_bounds(self) -> None:
        bounds = compute_range([], False, PaneContext())
        self.assertEqual(bounds, AxisBounds(0.0, 1.0, 0.0, 1.0, 0.0, 1.0, 1))

    def test_context_defaults_when_omitted(self) -> None:
        bounds = compute_range([_series([2.0, 4.0])])
        self.assertEqual((bounds.ymin, bounds.ymax), (2.0, 4.0))

    def test_line_bounds_match_data_and_y2_borrows_y(self) -> None:
        bounds = compute_range([_series([2.0, 5.0, -1.0], x=[1.0, 2.0, 3.0])], False, PaneContext())
        self.assertEqual(bounds.as_tuple(), (1.0, 3.0, -1.0, 5.0, -1.0, 5.0))
        self.assertEqual(bounds.max_pts, 3)

    def test_y_borrows_from_y2_when_only_secondary_has_data(self) -> None:
        bounds = compute_range([_series([10.0, 20.0], is_y2_axis=True)], False, PaneContext())
        self.assertEqual((bounds.y2min, bounds.y2max), (10.0, 20.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (10.0, 20.0))

    def test_y_and_y2_are_accumulated_independently(self) -> None:
        curves = [
            _series([1.0, 3.0]),
            _series([100.0, 300.0], is_y2_axis=True),
            _series([-2.0, 0.5]),
        ]
        bounds = compute_range(curves, False, PaneContext())
        self.assertEqual((bounds.ymin, bounds.ymax), (-2.0, 3.0))
        self.assertEqual((bounds.y2min, bounds.y2max), (100.0, 300.0))

    def test_missing_points_are_ignored(self) -> None:
        bounds = compute_range([_series([math.nan, 4.0, 2.0], x=[-50.0, 1.0, 2.0])], False, PaneContext())
        self.assertEqual(bounds.as_tuple()[:4], (1.0, 2.0, 2.0, 4.0))

    def test_all_missing_series_falls_back_to_defaults(self) -> None:
        bounds = compute_range([_series([math.nan, math.nan])], False, PaneContext())
        self.assertEqual(bounds.as_tuple(), (0.0, 1.0, 0.0, 1.0, 0.0, 1.0))
        self.assertEqual(bounds.max_pts, 2)

    def test_empty_series_contributes_no_extent(self) -> None:
        curves = [_series([]), _series([5.0, 6.0])]
        bounds = compute_range(curves, False, PaneContext())
        self.assertEqual((bounds.xmin, bounds.xmax, bounds.ymin, bounds.ymax), (1.0, 2.0, 5.0, 6.0))

    def test_ignore_initial_skips_leading_zero_y_only(self) -> None:
        series = _series([0.0, 0.0, 3.0, 1.0, 2.0])
        with_zeros = compute_range([series], False, PaneContext())
        without = compute_range([series], True, PaneContext())
        self.assertEqual((with_zeros.ymin, with_zeros.ymax), (0.0, 3.0))
        self.assertEqual((without.ymin, without.ymax), (1.0, 3.0))
        self.assertEqual((without.xmin, without.xmax), (1.0, 5.0))

    def test_ignore_initial_all_zero_series_still_reports_x(self) -> None:
        bounds = compute_range([_series([0.0, 0.0], x=[3.0, 7.0])], True, PaneContext())
        self.assertEqual((bounds.xmin, bounds.xmax), (3.0, 7.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (0.0, 1.0))

    def test_ignore_initial_does_not_change_stacked_series(self) -> None:
        ctx = PaneContext(bar_type="stack")
        curves = [_series([0.0, 4.0], kind="bar"), _series([0.0, 2.0], kind="bar")]
        self.assertEqual(compute_range(curves, True, ctx), compute_range(curves, False, ctx))

    def test_ordinal_x_axis_spans_point_count(self) -> None:
        ctx = PaneContext().set_axis_types(x="ordinal")
        series = _series([3.0, 1.0, 4.0, 1.0, 5.0], x=[10.0, 20.0, 30.0, 40.0, 50.0])
        bounds = compute_range([series], False, ctx)
        self.assertEqual((bounds.xmin, bounds.xmax), (1.0, 5.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (1.0, 5.0))

    def test_text_axis_counts_as_ordinal_for_y2_series(self) -> None:
        ctx = PaneContext().set_axis_types(y2="text")
        curves = [_series([7.0, 9.0, 8.0], is_y2_axis=True), _series([100.0, 200.0])]
        bounds = compute_range(curves, False, ctx)
        self.assertEqual((bounds.y2min, bounds.y2max), (1.0, 3.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (100.0, 200.0))

    def test_bar_value_axis_always_includes_zero(self) -> None:
        ctx = PaneContext()
        positive = compute_range([_series([2.0, 5.0], kind="bar")], False, ctx)
        negative = compute_range([_series([-3.0, -1.0], kind="bar")], False, ctx)
        self.assertEqual((positive.ymin, positive.ymax), (0.0, 5.0))
        self.assertEqual((negative.ymin, negative.ymax), (-3.0, 0.0))
        for bounds in (positive, negative):
            self.assertLessEqual(bounds.ymin, 0.0)
            self.assertGreaterEqual(bounds.ymax, 0.0)

    def test_bar_base_axis_reserves_half_cluster_width(self) -> None:
        ctx = PaneContext(cluster_scale_width=2.0)
        bounds = compute_range([_series([1.0, 2.0], x=[5.0, 6.0], kind="bar")], False, ctx)
        self.assertEqual((bounds.xmin, bounds.xmax), (4.0, 7.0))

    def test_ordinal_bar_base_axis_is_not_padded(self) -> None:
        ctx = PaneContext().set_axis_types(x="ordinal")
        bounds = compute_range([_series([1.0, 2.0, 3.0], kind="bar")], False, ctx)
        self.assertEqual((bounds.xmin, bounds.xmax), (1.0, 3.0))

    def test_y_based_bars_pad_y_and_include_zero_on_x(self) -> None:
        ctx = PaneContext(bar_base="y")
        bounds = compute_range([_series([1.0, 2.0], x=[2.0, 4.0], kind="bar")], False, ctx)
        self.assertEqual((bounds.xmin, bounds.xmax), (0.0, 4.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (0.5, 2.5))

    def test_stacked_bars_use_accumulated_extent(self) -> None:
        ctx = PaneContext(bar_type="stack")
        curves = [_series([3.0, 1.0], kind="bar"), _series([4.0, 2.0], kind="bar")]
        bounds = compute_range(curves, False, ctx)
        self.assertEqual((bounds.ymin, bounds.ymax), (0.0, 7.0))
        second = series_extent(curves, curves[1], False, ctx)
        self.assertEqual((second.ymin, second.ymax), (0.0, 7.0))
        self.assertEqual((second.xmin, second.xmax), (0.5, 2.5))

    def test_stacked_lines_use_accumulated_extent(self) -> None:
        ctx = PaneContext(line_type="stack")
        curves = [_series([1.0, 2.0]), _series([1.0, 5.0])]
        bounds = compute_range(curves, False, ctx)
        self.assertEqual((bounds.ymin, bounds.ymax), (0.0, 7.0))

    def test_percent_stack_spans_zero_to_hundred(self) -> None:
        ctx = PaneContext(bar_type="percent_stack")
        curves = [_series([1.0, 2.0], kind="bar"), _series([3.0, 2.0], kind="bar")]
        bounds = compute_range(curves, False, ctx)
        self.assertEqual((bounds.ymin, bounds.ymax), (0.0, 100.0))

    def test_bar_with_only_skipped_zeros_still_includes_zero(self) -> None:
        curves = [_series([0.0, 0.0, 0.0], kind="bar"), _series([5.0, 10.0])]
        bounds = compute_range(curves, True, PaneContext())
        self.assertEqual((bounds.ymin, bounds.ymax), (0.0, 10.0))
        self.assertEqual((bounds.xmin, bounds.xmax), (0.5, 3.5))

    def test_stacked_y_based_bars_accumulate_along_x(self) -> None:
        ctx = PaneContext(bar_type="stack", bar_base="y")
        a = _series([1.0, 2.0], x=[3.0, 1.0], kind="bar")
        b = _series([1.0, 2.0], x=[2.0, -4.0], kind="bar")
        second = series_extent([a, b], b, False, ctx)
        self.assertEqual((second.xmin, second.xmax), (-4.0, 5.0))
        self.assertEqual((second.ymin, second.ymax), (0.5, 2.5))
        bounds = compute_range([a, b], False, ctx)
        self.assertEqual((bounds.xmin, bounds.xmax), (-4.0, 5.0))
        self.assertEqual((bounds.ymin, bounds.ymax), (0.5, 2.5))

    def test_percent_stack_with_mixed_signs_splits_by_magnitude(self) -> None:
        ctx = PaneContext(bar_type="percent_stack")
        curves = [_series([3.0], kind="bar"), _series([-1.0], kind="bar")]
        bounds = compute_range(curves, False, ctx)
        self.assertEqual((bounds.ymin, bounds.ymax), (-25.0, 75.0))
        self.assertEqual((bounds.xmin, bounds.xmax), (0.5, 1.5))

    def test_max_pts_tracks_longest_series(self) -> None:
        curves = [_series([1.0]), _series([1.0, 2.0, 3.0, 4.0]), _series([1.0, 2.0])]
        self.assertEqual(compute_range(curves, False, PaneContext()).max_pts, 4)

    def test_deep_copy_yields_identical_bounds(self) -> None:
        ctx = PaneContext(bar_type="stack")
        curves = CurveList([_series([3.0, -1.0], kind="bar"), _series([2.0, 2.0], kind="bar"), _series([5.0, 6.0])])
        clone = curves.copy()
        self.assertEqual(curves.get_range(False, ctx), clone.get_range(False, ctx))


if __name__ == "__main__":
    unittest.main()
