from __future__ import annotations

import unittest

from growthline_chart import ChartEvent, parse_chart_event


class ChartEventParsingTests(unittest.TestCase):
    def test_slider_strings_are_coerced(self) -> None:
        event = parse_chart_event("yearWindow", {"min": "2005", "max": 2010.0})
        self.assertEqual(event, ChartEvent("yearWindow", {"min": 2005, "max": 2010}))
        event = parse_chart_event("valueWindow", {"min": "-2.5", "max": "7"})
        self.assertEqual(event.payload, {"min": -2.5, "max": 7.0})

    def test_inverted_window_still_parses(self) -> None:
        # Validation belongs to the controller, which reports InvalidRangeError.
        event = parse_chart_event("yearWindow", {"min": 2025, "max": 2000})
        self.assertIsNotNone(event)

    def test_malformed_payloads_return_none(self) -> None:
        self.assertIsNone(parse_chart_event("zoom", {}))
        self.assertIsNone(parse_chart_event("yearWindow", {"min": 2000}))
        self.assertIsNone(parse_chart_event("yearWindow", {"min": 2000.5, "max": 2010}))
        self.assertIsNone(parse_chart_event("valueWindow", {"min": "abc", "max": 1}))
        self.assertIsNone(parse_chart_event("brush", {"axis": "z", "selection": [0, 1]}))
        self.assertIsNone(parse_chart_event("brush", {"axis": "x", "selection": [0]}))
        self.assertIsNone(parse_chart_event("toggleVisible", {"country": ""}))
        self.assertIsNone(parse_chart_event("togglePin", {"country": 3}))
        self.assertIsNone(parse_chart_event("normalize", {"enabled": "yes"}))
        self.assertIsNone(parse_chart_event("hover", ["China"]))

    def test_brush_selection_can_be_cleared(self) -> None:
        event = parse_chart_event("brush", {"axis": "y", "selection": None})
        self.assertEqual(event.payload, {"axis": "y", "selection": None})
        event = parse_chart_event("brush", {"axis": "x", "selection": [10, "20.5"]})
        self.assertEqual(event.payload["selection"], (10.0, 20.5))

    def test_hover_and_toggles(self) -> None:
        self.assertEqual(parse_chart_event("hover", {"country": "China", "year": "2010"}).payload["year"], 2010)
        self.assertIsNone(parse_chart_event("hover", {}).payload["country"])
        self.assertEqual(parse_chart_event("togglePin", {"country": "Japan"}).kind, "togglePin")
        self.assertEqual(parse_chart_event("reset", None), ChartEvent("reset", {}))

    def test_normalize_anchor_is_optional(self) -> None:
        self.assertEqual(parse_chart_event("normalize", {"enabled": True}).payload["anchor_year"], None)
        self.assertEqual(parse_chart_event("normalize", {"enabled": True, "anchor_year": 2005}).payload["anchor_year"], 2005)


if __name__ == "__main__":
    unittest.main()
