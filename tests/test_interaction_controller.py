from __future__ import annotations

import unittest

from growthline_chart import (
    ChartConfig,
    DataPoint,
    InteractionController,
    InvalidRangeError,
    Series,
    SeriesRepository,
    ViewState,
    initial_view_state,
    set_value_window,
    set_year_window,
    toggle_visible,
)
from growthline_chart import events


def _repo() -> SeriesRepository:
    return SeriesRepository(
        [
            Series("United States", (DataPoint(2000, 4.1), DataPoint(2001, 1.0), DataPoint(2010, 2.7))),
            Series("China", (DataPoint(2000, 8.5), DataPoint(2010, 10.6))),
            Series("Japan", (DataPoint(2001, 0.4), DataPoint(2010, 4.1))),
        ]
    )


def _config() -> ChartConfig:
    return ChartConfig(countries=("United States", "China", "Japan"), year_min=2000, year_max=2020)


class TransitionFunctionTests(unittest.TestCase):
    def test_inverted_year_window_is_rejected_without_mutation(self) -> None:
        state = initial_view_state(_repo(), _config())
        result = set_year_window(state, 2025, 2000)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, InvalidRangeError)
        self.assertIs(result.state, state)
        self.assertFalse(result.changed)

    def test_inverted_value_window_is_rejected(self) -> None:
        state = ViewState(year_min=2000, year_max=2020, value_min=-1.0, value_max=1.0)
        result = set_value_window(state, 5.0, -5.0)
        self.assertEqual(result.error.axis, "value")
        self.assertEqual(result.state, state)

    def test_toggle_visible_twice_restores_membership(self) -> None:
        state = initial_view_state(_repo(), _config())
        once = toggle_visible(state, "China").state
        self.assertNotIn("China", once.visible)
        twice = toggle_visible(once, "China").state
        self.assertEqual(twice.visible, state.visible)


class InteractionControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = InteractionController(_repo(), _config())

    def test_initial_state(self) -> None:
        state = self.controller.get_view_state()
        self.assertEqual((state.year_min, state.year_max), (2000, 2020))
        self.assertIsNone(state.value_min)
        self.assertEqual(state.visible, frozenset({"United States", "China", "Japan"}))
        self.assertEqual(state.pinned, frozenset())
        self.assertFalse(state.normalize)
        geometry = self.controller.get_geometry()
        self.assertEqual(geometry.y_domain, (0.4, 10.6))

    def test_dispatch_rejected_window_reports_error_and_keeps_state(self) -> None:
        before = self.controller.get_view_state()
        with self.assertLogs("growthline_chart.controller", level="INFO"):
            result = self.controller.dispatch(events.year_window(2025, 2000))
        self.assertIsInstance(result.error, InvalidRangeError)
        self.assertIs(self.controller.get_view_state(), before)
        self.assertIs(self.controller.last_error, result.error)

        self.controller.dispatch(events.year_window(2005, 2010))
        self.assertIsNone(self.controller.last_error)
        self.assertEqual(self.controller.get_view_state().year_min, 2005)

    def test_brush_year_inverts_pixels_through_current_scale(self) -> None:
        width = self.controller.viewport.plot_width
        result = self.controller.dispatch(events.brush("x", (width * 0.75, width * 0.25)))
        self.assertTrue(result.ok)
        state = self.controller.get_view_state()
        self.assertEqual((state.year_min, state.year_max), (2005, 2015))

    def test_brush_value_orders_inverted_pixels(self) -> None:
        self.controller.dispatch(events.value_window(-10.0, 10.0))
        height = self.controller.viewport.plot_height
        self.controller.dispatch(events.brush("y", (0.0, height / 2)))
        state = self.controller.get_view_state()
        self.assertAlmostEqual(state.value_min or 0.0, 0.0)
        self.assertAlmostEqual(state.value_max or 0.0, 10.0)

    def test_empty_brush_is_noop(self) -> None:
        before = self.controller.get_view_state()
        for selection in (None, (40.0, 40.0)):
            result = self.controller.dispatch(events.brush("x", selection))
            self.assertTrue(result.ok)
            self.assertFalse(result.changed)
        self.assertIs(self.controller.get_view_state(), before)

    def test_hover_is_transient(self) -> None:
        before = self.controller.get_view_state()
        self.controller.dispatch(events.hover("China", 2010))
        self.assertIs(self.controller.get_view_state(), before)
        highlight = self.controller.highlight()
        self.assertEqual(highlight.hovered, "China")
        self.assertEqual(highlight.tooltip.value, 10.6)
        self.assertEqual(highlight.tooltip.text(), "Country: China | 2010: 10.60%")

        self.controller.dispatch(events.hover(None))
        self.assertIsNone(self.controller.highlight().tooltip)

    def test_hover_on_hidden_or_unknown_country_clears(self) -> None:
        self.controller.dispatch(events.hover("Japan"))
        self.controller.dispatch(events.toggle_visible("Japan"))
        self.assertIsNone(self.controller.highlight().hovered)
        self.controller.dispatch(events.hover("Japan"))
        self.assertIsNone(self.controller.highlight().hovered)
        self.controller.dispatch(events.hover("Atlantis"))
        self.assertIsNone(self.controller.highlight().hovered)

    def test_pin_survives_hover_changes(self) -> None:
        self.controller.dispatch(events.toggle_pin("China"))
        self.controller.dispatch(events.hover("Japan"))
        self.controller.dispatch(events.hover(None))
        highlight = self.controller.highlight()
        self.assertTrue(highlight.is_emphasized("China"))
        self.assertFalse(highlight.is_emphasized("Japan"))
        self.controller.dispatch(events.toggle_pin("China"))
        self.assertEqual(self.controller.get_view_state().pinned, frozenset())

    def test_reset_restores_windows_clears_pins_keeps_visibility(self) -> None:
        self.controller.dispatch(events.year_window(2005, 2006))
        self.controller.dispatch(events.value_window(-1.0, 1.0))
        self.controller.dispatch(events.toggle_pin("China"))
        self.controller.dispatch(events.toggle_visible("Japan"))
        self.controller.dispatch(events.reset())
        state = self.controller.get_view_state()
        self.assertEqual((state.year_min, state.year_max), (2000, 2020))
        self.assertEqual((state.value_min, state.value_max), (0.4, 10.6))
        self.assertEqual(state.pinned, frozenset())
        self.assertNotIn("Japan", state.visible)

    def test_normalize_defaults_anchor_to_window_start(self) -> None:
        self.controller.dispatch(events.year_window(2001, 2010))
        self.controller.dispatch(events.normalize(True))
        state = self.controller.get_view_state()
        self.assertTrue(state.normalize)
        self.assertEqual(state.anchor_year, 2001)
        points = dict(self.controller.get_geometry().points["United States"])
        self.assertEqual(points[2001], 0.0)

        self.controller.dispatch(events.normalize(True, 2010))
        self.assertEqual(self.controller.get_view_state().anchor_year, 2010)

    def test_anchor_outside_year_window_uses_nearest_window_year(self) -> None:
        self.controller.dispatch(events.normalize(True))
        self.controller.dispatch(events.year_window(2001, 2010))
        self.assertEqual(self.controller.get_view_state().anchor_year, 2000)
        points = self.controller.get_geometry().points
        us = dict(points["United States"])
        self.assertEqual(us[2001], 0.0)
        self.assertAlmostEqual(us[2010], 1.7)
        # China has no 2001 observation, so it stays unshifted.
        self.assertEqual(dict(points["China"])[2010], 10.6)

    def test_non_finite_value_window_is_rejected(self) -> None:
        before = self.controller.get_view_state()
        result = self.controller.dispatch(events.value_window(float("nan"), 5.0))
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, InvalidRangeError)
        self.assertIn("finite", str(result.error))
        self.assertIs(self.controller.get_view_state(), before)
        self.assertEqual(self.controller.get_geometry().y_domain, (0.4, 10.6))

        result = self.controller.dispatch(events.value_window(-1.0, float("inf")))
        self.assertFalse(result.ok)
        self.assertIs(self.controller.get_view_state(), before)

    def test_reset_while_normalized_uses_rebased_extent(self) -> None:
        self.controller.dispatch(events.normalize(True))
        self.controller.dispatch(events.reset())
        state = self.controller.get_view_state()
        self.assertTrue(state.normalize)
        self.assertAlmostEqual(state.value_min, -3.1)
        self.assertAlmostEqual(state.value_max, 4.1)

    def test_unknown_country_toggle_is_ignored(self) -> None:
        before = self.controller.get_view_state()
        with self.assertLogs("growthline_chart.controller", level="WARNING"):
            result = self.controller.dispatch(events.toggle_visible("Atlantis"))
        self.assertTrue(result.ok)
        self.assertIs(self.controller.get_view_state(), before)

    def test_geometry_tracks_state(self) -> None:
        first = self.controller.get_geometry()
        self.assertIs(self.controller.get_geometry(), first)
        self.controller.dispatch(events.toggle_visible("China"))
        self.assertNotIn("China", self.controller.get_geometry().paths)


if __name__ == "__main__":
    unittest.main()
