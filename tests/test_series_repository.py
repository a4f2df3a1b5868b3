from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from growthline_chart import ChartConfig, DataPoint, DataSourceError, Series, build_repository, load_repository
from growthline_chart.repository import load_rows, parse_cell


def _rows() -> list[dict[str, str]]:
    return [
        {"Country Name": "United States", "2000": "4.1", "2001": "1.0", "2002": "1.7"},
        {"Country Name": "China", "2000": "8.5", "2001": "", "2002": "9.1"},
        {"Country Name": "Aruba", "2000": "7.6", "2001": "4.2", "2002": "-0.9"},
        {"Country Name": "Japan", "2000": "n/a", "2001": "0.4", "2002": "nan"},
    ]


class SeriesRepositoryTests(unittest.TestCase):
    def test_build_filters_allow_list_and_keeps_allow_list_order(self) -> None:
        repo = build_repository(_rows(), ["China", "United States", "Germany"], (2000, 2002))
        self.assertEqual(repo.countries(), ("China", "United States"))
        self.assertNotIn("Aruba", repo)
        # Absent countries get no entry at all, not an empty series.
        self.assertNotIn("Germany", repo)

    def test_missing_and_non_numeric_cells_are_skipped_not_defaulted(self) -> None:
        repo = build_repository(_rows(), ["China", "Japan"], (2000, 2002))
        self.assertEqual(repo["China"].years(), (2000, 2002))
        self.assertEqual(repo["Japan"].points, (DataPoint(2001, 0.4),))

    def test_year_range_bounds_points(self) -> None:
        repo = build_repository(_rows(), ["United States"], (2001, 2001))
        self.assertEqual(repo["United States"].points, (DataPoint(2001, 1.0),))

    def test_duplicate_rows_keep_first_observation(self) -> None:
        rows = _rows() + [{"Country Name": "United States", "2000": "99", "2001": "", "2002": ""}]
        with self.assertLogs("growthline_chart.repository", level="WARNING"):
            repo = build_repository(rows, ["United States"], (2000, 2002))
        self.assertEqual(repo["United States"].value_at(2000), 4.1)

    def test_build_rejects_empty_allow_list_and_inverted_range(self) -> None:
        with self.assertRaises(ValueError):
            build_repository(_rows(), [], (2000, 2002))
        with self.assertRaises(ValueError):
            build_repository(_rows(), ["China"], (2002, 2000))

    def test_value_extent_spans_all_series(self) -> None:
        repo = build_repository(_rows(), ["United States", "China"], (2000, 2002))
        self.assertEqual(repo.value_extent(), (1.0, 9.1))
        self.assertIsNone(build_repository(_rows(), ["Germany"], (2000, 2002)).value_extent())

    def test_series_requires_ascending_unique_years(self) -> None:
        with self.assertRaises(ValueError):
            Series("X", (DataPoint(2001, 1.0), DataPoint(2000, 2.0)))
        with self.assertRaises(ValueError):
            Series("X", (DataPoint(2000, 1.0), DataPoint(2000, 2.0)))

    def test_parse_cell(self) -> None:
        self.assertEqual(parse_cell(" 2.5 "), 2.5)
        self.assertEqual(parse_cell(3), 3.0)
        self.assertIsNone(parse_cell(""))
        self.assertIsNone(parse_cell(None))
        self.assertIsNone(parse_cell("inf"))
        self.assertIsNone(parse_cell(True))


class LoadRepositoryTests(unittest.TestCase):
    def test_load_repository_reads_wide_csv(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "gdp.csv"
            path.write_text(
                "Country Name,Country Code,2000,2001,2002\n"
                "United States,USA,4.1,1.0,1.7\n"
                "China,CHN,8.5,,9.1\n"
                "Aruba,ABW,7.6,4.2,-0.9\n",
                encoding="utf-8",
            )
            config = ChartConfig(countries=("United States", "China"), year_min=2000, year_max=2002)
            repo = load_repository(path, config)
        self.assertEqual(len(repo), 2)
        self.assertEqual(repo["China"].points, (DataPoint(2000, 8.5), DataPoint(2002, 9.1)))
        self.assertEqual(repo.point_count(), 5)

    def test_unreadable_source_raises_data_source_error(self) -> None:
        with self.assertRaises(DataSourceError):
            load_rows("/nonexistent/growthline/gdp.csv")

    def test_missing_country_column_raises_data_source_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.csv"
            path.write_text("Name,2000\nChina,8.5\n", encoding="utf-8")
            with self.assertRaises(DataSourceError):
                load_rows(path)

    def test_empty_file_raises_data_source_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.csv"
            path.write_text("", encoding="utf-8")
            with self.assertRaises(DataSourceError):
                load_rows(path)


if __name__ == "__main__":
    unittest.main()
