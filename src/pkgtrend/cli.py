"""CLI argument parsing and command implementations."""

import argparse
import logging
from datetime import date, datetime, timezone
from typing import Any

from tabulate import tabulate

from .binning import BINNING_OPTIONS, valid_bin_types
from .comparisons import find_comparison, get_popular_comparisons
from .config import (
    DEFAULT_COMPARISON_FILE,
    load_comparison_file,
    parse_config,
    set_baseline,
)
from .export import export_csv, export_json, export_markdown, export_summary_csv
from .loader import load_raw_series, parse_day
from .logging import setup_logging
from .partial import last_complete_bin_start
from .pipeline import build_chart
from .timerange import TIME_RANGE_LABELS
from .types import BIN_TYPES, SHOW_DATA_MODES, TIME_RANGES, TRANSFORM_MODES, ChartResult
from .utils import format_number, format_percentage, make_sparkline

logger = logging.getLogger("pkgtrend")

DEFAULT_DATA_FILE = "downloads.json"


def _resolve_now(args: argparse.Namespace) -> date | datetime:
    today = getattr(args, "today", None)
    if today:
        return parse_day(today)
    return datetime.now(timezone.utc)


def load_inputs(args: argparse.Namespace) -> tuple[dict[str, Any], ChartResult]:
    """Load groups, raw data and settings from ``args`` and run the pipeline.

    Returns:
        Tuple of (comparison, result) where comparison holds ``title`` and
        ``groups``.
    """
    if args.preset:
        preset = find_comparison(args.preset)
        if preset is None:
            raise ValueError(f"Unknown preset: {args.preset!r}")
        comparison: dict[str, Any] = {"title": preset["title"], "groups": preset["groups"]}
    else:
        comparison = load_comparison_file(args.comparison)

    if args.baseline:
        comparison["groups"] = set_baseline(comparison["groups"], args.baseline)

    config = parse_config(
        args.range or comparison.get("range"),
        args.bin or comparison.get("bin_type"),
        args.transform or comparison.get("transform"),
        args.show_data or comparison.get("show_data"),
    )

    raw_series = load_raw_series(args.data)
    result = build_chart(comparison["groups"], raw_series, config, _resolve_now(args))
    return comparison, result


def _print_errors(result: ChartResult) -> None:
    for name, message in result["errors"].items():
        logger.warning("%s: %s", name, message)


def cmd_show(args: argparse.Namespace) -> None:
    """Show command: display the summary table in the terminal."""
    comparison, result = load_inputs(args)
    _print_errors(result)

    if not result["summary"]:
        print("No complete bins to summarize.")
        return

    unit = BINNING_OPTIONS[result["bin_type"]]["single"]
    values_by_name = {
        s["name"]: [p["downloads"] for p in s["points"]] for s in result["series"]
    }

    rows = []
    for i, row in enumerate(result["summary"], 1):
        rows.append(
            [
                i,
                row["name"],
                f"{row['total_downloads']:,}",
                f"{row['last_bin_downloads']:,}",
                f"{row['growth']:+,}",
                format_percentage(row["growth_percentage"]),
                make_sparkline(values_by_name.get(row["name"], [])),
                row["color"] or "",
            ]
        )

    print(f"{comparison['title']} ({result['start_date']} to {result['end_date']})\n")
    headers = ["#", "Package", "Total", f"Last {unit}", "Growth", "Growth %", "Trend", "Color"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    last_complete = last_complete_bin_start(_resolve_now(args), result["bin_type"])
    print(f"\nLast complete {unit} starts {last_complete.isoformat()}")
    if result["baseline"]:
        print(f"Chart values are relative to baseline {result['baseline']}.")


def cmd_series(args: argparse.Namespace) -> None:
    """Series command: print binned points for every rendered series."""
    _, result = load_inputs(args)
    _print_errors(result)

    field = "change" if result["transform"] == "normalize-y" else "downloads"
    for series in result["series"]:
        print(f"{series['name']} ({series['color']})")
        if series["error"]:
            print(f"  error: {series['error']}\n")
            continue

        rows = [
            [
                point["date"].isoformat() + ("*" if partial else ""),
                format_number(point[field]),
            ]
            for point, partial in zip(series["points"], series["is_partial_trailing"])
        ]
        if rows:
            print(tabulate(rows, headers=["Bin", field.title()], tablefmt="simple"))
        else:
            print("  no data in range")
        print()

    if result["show_data"] == "all":
        print("* partial bin")


def cmd_export(args: argparse.Namespace) -> None:
    """Export command: export series or summary in various formats."""
    _, result = load_inputs(args)

    if args.format == "csv":
        output = export_summary_csv(result["summary"]) if args.summary else export_csv(result)
    elif args.format == "json":
        output = export_json(result)
    elif args.format in ("markdown", "md"):
        output = export_markdown(result)
    else:
        print(f"Unknown format: {args.format}")
        return

    if args.output:
        with open(args.output, "w") as f:
            f.write(output)
        logger.info("Exported to %s", args.output)
    else:
        print(output)


def cmd_ranges(args: argparse.Namespace) -> None:
    """Ranges command: show which bin types each range allows."""
    rows = []
    for time_range in TIME_RANGES:
        allowed = valid_bin_types(time_range)
        rows.append(
            [time_range, TIME_RANGE_LABELS[time_range]]
            + ["yes" if b in allowed else "-" for b in ("daily", "weekly", "monthly", "yearly")]
        )
    headers = ["Range", "Label", "Daily", "Weekly", "Monthly", "Yearly"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))


def cmd_presets(args: argparse.Namespace) -> None:
    """Presets command: list the popular comparisons."""
    rows = []
    for comparison in get_popular_comparisons():
        names = [" + ".join(p["name"] for p in g["packages"]) for g in comparison["groups"]]
        rows.append([comparison["title"], ", ".join(names)])
    print(tabulate(rows, headers=["Preset", "Packages"], tablefmt="simple"))


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-c",
        "--comparison",
        default=DEFAULT_COMPARISON_FILE,
        help=f"Comparison file, YAML or JSON (default: {DEFAULT_COMPARISON_FILE})",
    )
    source.add_argument(
        "-p",
        "--preset",
        help="Use a popular comparison preset instead of a file",
    )
    parser.add_argument(
        "-i",
        "--data",
        default=DEFAULT_DATA_FILE,
        help=f"Raw download data, JSON or YAML (default: {DEFAULT_DATA_FILE})",
    )
    parser.add_argument("-r", "--range", choices=TIME_RANGES, help="Time range")
    parser.add_argument("-b", "--bin", choices=BIN_TYPES, help="Bin granularity")
    parser.add_argument(
        "-t", "--transform", choices=TRANSFORM_MODES, help="Value transform"
    )
    parser.add_argument(
        "-s",
        "--show-data",
        choices=SHOW_DATA_MODES,
        help="Include the partial bin (all) or only complete bins",
    )
    parser.add_argument(
        "--baseline",
        help="Package group (by main package name) to normalize against",
    )
    parser.add_argument(
        "--today",
        help="Treat this day (YYYY-MM-DD) as today (default: current UTC day)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Compare package download trends over time.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug output"
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings and errors"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Display the summary table in terminal",
    )
    _add_input_arguments(show_parser)
    show_parser.set_defaults(func=cmd_show)

    # series command
    series_parser = subparsers.add_parser(
        "series",
        help="Display binned chart points for each package",
    )
    _add_input_arguments(series_parser)
    series_parser.set_defaults(func=cmd_series)

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export chart data in various formats (csv, json, markdown)",
    )
    _add_input_arguments(export_parser)
    export_parser.add_argument(
        "-f",
        "--format",
        choices=["csv", "json", "markdown", "md"],
        default="csv",
        help="Export format (default: csv)",
    )
    export_parser.add_argument(
        "--summary",
        action="store_true",
        help="Export summary rows instead of chart points (csv only)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: stdout)",
    )
    export_parser.set_defaults(func=cmd_export)

    # ranges command
    ranges_parser = subparsers.add_parser(
        "ranges",
        help="Show the bin types available for each time range",
    )
    ranges_parser.set_defaults(func=cmd_ranges)

    # presets command
    presets_parser = subparsers.add_parser(
        "presets",
        help="List popular comparison presets",
    )
    presets_parser.set_defaults(func=cmd_presets)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 1
    return 0
