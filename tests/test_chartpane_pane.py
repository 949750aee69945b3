from __future__ import annotations

import unittest

import numpy as np

import chartpane as cp
from chartpane.context import AxisSettings, PaneContext
from chartpane.errors import ChartDataError
from chartpane.pane import Pane

GREEN = (10, 200, 30, 255)
PURPLE = (150, 40, 200, 255)


def _has_color(frame: np.ndarray, color: tuple[int, int, int, int]) -> bool:
    return bool(np.any(np.all(frame == np.asarray(color, dtype=np.uint8), axis=-1)))


class PaneContextTests(unittest.TestCase):
    def test_invalid_choices_raise(self) -> None:
        with self.assertRaises(ChartDataError):
            PaneContext(bar_type="bogus")  # type: ignore[arg-type]
        with self.assertRaises(ChartDataError):
            PaneContext().set_line_type("zigzag")  # type: ignore[arg-type]
        with self.assertRaises(ChartDataError):
            PaneContext().set_cluster_scale_width(0.0)
        with self.assertRaises(ValueError):
            AxisSettings("log")  # type: ignore[arg-type]

    def test_setters_chain_and_report_modes(self) -> None:
        ctx = PaneContext().set_bar_type("percent_stack").set_line_type("stack").set_bar_base("y")
        self.assertTrue(ctx.is_bar_stacked)
        self.assertTrue(ctx.is_line_stacked)
        ctx.set_axis_types(y2="text")
        self.assertTrue(ctx.is_y_ordinal(True))
        self.assertFalse(ctx.is_y_ordinal(False))
        self.assertTrue(ctx.is_base_ordinal(True))
        self.assertFalse(ctx.is_x_ordinal())


class PaneRenderTests(unittest.TestCase):
    def test_render_returns_rgba_frame(self) -> None:
        pane = Pane(width=200, height=150)
        pane.add_line([1.0, 3.0, 2.0], marker_size=2)
        pane.add_scatter([2.0, 1.0, 3.0])
        frame = pane.render()
        self.assertEqual(frame.shape, (150, 200, 4))
        self.assertEqual(frame.dtype, np.uint8)
        self.assertTrue(np.array_equal(frame, pane.render()))

    def test_empty_pane_renders(self) -> None:
        frame = Pane(width=120, height=90).render()
        self.assertEqual(frame.shape, (90, 120, 4))

    def test_cluster_bars_are_side_by_side(self) -> None:
        pane = Pane(width=200, height=150)
        pane.add_bar([3.0], color=GREEN)
        pane.add_bar([5.0], color=PURPLE)
        frame = pane.render()
        self.assertTrue(_has_color(frame, GREEN))
        self.assertTrue(_has_color(frame, PURPLE))

    def test_sorted_overlay_draws_smaller_values_first(self) -> None:
        for bar_type, green_visible in (("overlay", True), ("sorted_overlay", False)):
            pane = Pane(width=200, height=150, context=PaneContext(bar_type=bar_type))  # type: ignore[arg-type]
            pane.add_bar([3.0], color=GREEN)
            pane.add_bar([5.0], color=PURPLE)
            frame = pane.render()
            self.assertEqual(_has_color(frame, GREEN), green_visible, bar_type)
            self.assertTrue(_has_color(frame, PURPLE), bar_type)

    def test_stacked_bars_render_both_segments(self) -> None:
        pane = Pane(width=200, height=150, context=PaneContext(bar_type="stack"))
        pane.add_bar([2.0, -1.0], color=GREEN)
        pane.add_bar([3.0, -2.0], color=PURPLE)
        frame = pane.render()
        self.assertTrue(_has_color(frame, GREEN))
        self.assertTrue(_has_color(frame, PURPLE))
        self.assertEqual((pane.last_bounds().ymin, pane.last_bounds().ymax), (-3.0, 5.0))  # type: ignore[union-attr]

    def test_secondary_axis_draws_right_spine(self) -> None:
        pane = Pane(width=200, height=150)
        pane.add_line([10.0, 20.0, 30.0])
        pane.add_line([1.0, 2.0, 3.0], is_y2_axis=True)
        frame = pane.render()
        self.assertEqual(tuple(frame[50, 174].tolist()), pane.axis_color)

    def test_pie_series_are_skipped_by_raster_renderer(self) -> None:
        pane = Pane(width=200, height=150)
        pane.add_pie(3.0, label="slice")
        with self.assertLogs("chartpane.render", level="DEBUG"):
            pane.render()

    def test_too_small_pane_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            Pane(width=5, height=5).render()
        with self.assertRaises(ChartDataError):
            Pane(width=0, height=10)

    def test_scale_factor_is_clamped(self) -> None:
        self.assertEqual(Pane(width=200, height=150).scale_factor(), 0.5)
        self.assertEqual(Pane(width=1440, height=1080).scale_factor(), 1.5)
        self.assertEqual(Pane(width=4000, height=4000).scale_factor(), 3.0)

    def test_add_helpers_refresh_cached_transform(self) -> None:
        pane = Pane(width=200, height=150)
        pane.add_line(x=[0.0, 10.0], y=[0.0, 10.0])
        pane.render()
        self.assertAlmostEqual(pane.active_transform.sy, 9.3)
        pane.add_line(x=[0.0, 10.0], y=[0.0, 20.0])
        self.assertAlmostEqual(pane.active_transform.sy, 4.65)

    def test_internal_state_is_not_a_constructor_argument(self) -> None:
        with self.assertRaises(TypeError):
            Pane(width=200, height=150, _gutter_left=1)  # type: ignore[call-arg]
        pane = Pane(width=200, height=150)
        pane.render()
        self.assertNotIn("_transform", repr(pane))
        self.assertNotIn("_gutter_left", repr(pane))

    def test_copy_is_independent_and_yields_same_bounds(self) -> None:
        pane = Pane(width=200, height=150, context=PaneContext(bar_type="stack"))
        pane.add_bar([1.0, 4.0])
        pane.add_bar([2.0, -3.0])
        pane.add_line([6.0, 7.0])
        clone = pane.copy()
        self.assertEqual(clone.compute_range(), pane.compute_range())
        clone.context.set_bar_type("cluster")
        clone.curves[0].label = "changed"
        self.assertEqual(pane.context.bar_type, "stack")
        self.assertEqual(pane.curves[0].label, "")


class PaneFactoryTests(unittest.TestCase):
    def test_missing_dimension_follows_aspect_ratio(self) -> None:
        self.assertEqual((cp.pane().width, cp.pane().height), (640, 480))
        p = cp.pane(width=640)
        self.assertEqual((p.width, p.height), (640, 480))
        p = cp.pane(height=300)
        self.assertEqual((p.width, p.height), (400, 300))
        p = cp.pane(width=100, height=100)
        self.assertEqual((p.width, p.height), (100, 100))

    def test_invalid_dimensions_raise(self) -> None:
        with self.assertRaises(ChartDataError):
            cp.pane(width=0)
        with self.assertRaises(ChartDataError):
            cp.pane(aspect_ratio=-1.0)

    def test_factory_keeps_supplied_context(self) -> None:
        ctx = PaneContext(line_type="stack")
        self.assertIs(cp.pane(context=ctx).context, ctx)


if __name__ == "__main__":
    unittest.main()
