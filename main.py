from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from growthline_chart import (
    ChartConfig,
    ChartEvent,
    ChartSession,
    DataSourceError,
    RasterCanvas,
    SvgCanvas,
    load_chart_config,
    load_repository,
)
from growthline_chart import events

DEFAULT_TITLE = "GDP annual growth (%)"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="growthline")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render the growth chart to SVG or PNG.")
    render.add_argument("csv", type=Path, nargs="?", default=None, help="Wide CSV; defaults to config csv_path.")
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--config", type=Path, default=None)
    render.add_argument("--format", choices=["svg", "png"], default=None, help="Default: from --out suffix.")
    render.add_argument("--title", default=DEFAULT_TITLE)
    render.add_argument("--year-window", type=int, nargs=2, metavar=("MIN", "MAX"), default=None)
    render.add_argument("--value-window", type=float, nargs=2, metavar=("MIN", "MAX"), default=None)
    render.add_argument("--hide", action="append", default=[], metavar="COUNTRY")
    render.add_argument("--pin", action="append", default=[], metavar="COUNTRY")
    render.add_argument("--normalize", action="store_true", help="Rebase each series to the anchor year.")
    render.add_argument("--anchor-year", type=int, default=None, help="Default: start of the year window.")
    render.add_argument("--hover", default=None, metavar="COUNTRY")
    render.add_argument("--hover-year", type=int, default=None)

    summary = sub.add_parser("summary", help="Print the loaded series.")
    summary.add_argument("csv", type=Path, nargs="?", default=None)
    summary.add_argument("--config", type=Path, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_chart_config(args.config) if args.config is not None else ChartConfig()
    except (OSError, ValueError) as exc:
        print(f"error: config {args.config}: {exc}", file=sys.stderr)
        return 2
    csv_path = args.csv if args.csv is not None else config.csv_path
    if csv_path is None:
        parser.error("a CSV path is required (positional or csv_path in --config)")

    try:
        if args.command == "render":
            return _render(args, config, csv_path)
        return _summary(config, csv_path)
    except DataSourceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def _render(args: argparse.Namespace, config: ChartConfig, csv_path: Path) -> int:
    fmt = args.format or ("png" if args.out.suffix.lower() == ".png" else "svg")
    if fmt == "png":
        canvas: SvgCanvas | RasterCanvas = RasterCanvas(config.viewport, config.theme, title=args.title)
    else:
        canvas = SvgCanvas(config.viewport, config.theme, title=args.title)
    session = ChartSession.open(csv_path, config, canvas)

    requested: list[ChartEvent] = []
    if args.year_window is not None:
        requested.append(events.year_window(*args.year_window))
    if args.value_window is not None:
        requested.append(events.value_window(*args.value_window))
    requested.extend(events.toggle_visible(country) for country in args.hide)
    requested.extend(events.toggle_pin(country) for country in args.pin)
    if args.normalize:
        requested.append(events.normalize(True, args.anchor_year))
    if args.hover is not None:
        requested.append(events.hover(args.hover, args.hover_year))

    for event in requested:
        result = session.dispatch(event)
        if not result.ok:
            print(f"error: {result.error}", file=sys.stderr)
            return 2
    session.flush()

    if isinstance(canvas, RasterCanvas):
        canvas.save_png(args.out)
    else:
        canvas.write(args.out)
    print(f"wrote {args.out} ({len(session.renderer.drawn_paths())} series)")
    return 0


def _summary(config: ChartConfig, csv_path: Path) -> int:
    repository = load_repository(csv_path, config)
    for country in repository.countries():
        series = repository[country]
        extent = series.extent()
        span = "n/a" if extent is None else f"{extent[0]:.2f}..{extent[1]:.2f}"
        print(f"{country:<20} points={len(series.points):>3} range={span}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
