"""Export functions for various formats."""

import csv
import io
import json
from typing import Any

from .types import ChartResult, SummaryRow


def export_csv(result: ChartResult, output: io.StringIO | None = None) -> str:
    """Export rendered series points to CSV, one row per point."""
    if output is None:
        output = io.StringIO()

    writer = csv.writer(output)
    writer.writerow(["name", "date", "downloads", "change", "partial", "color"])

    for series in result["series"]:
        for point, partial in zip(series["points"], series["is_partial_trailing"]):
            writer.writerow(
                [
                    series["name"],
                    point["date"].isoformat(),
                    point["downloads"],
                    point["change"],
                    int(partial),
                    series["color"],
                ]
            )

    return output.getvalue()


def export_summary_csv(rows: list[SummaryRow], output: io.StringIO | None = None) -> str:
    """Export summary rows to CSV."""
    if output is None:
        output = io.StringIO()

    writer = csv.writer(output)
    writer.writerow(
        [
            "rank",
            "name",
            "total_downloads",
            "last_bin_downloads",
            "growth",
            "growth_percentage",
        ]
    )

    for i, row in enumerate(rows, 1):
        writer.writerow(
            [
                i,
                row["name"],
                row["total_downloads"],
                row["last_bin_downloads"],
                row["growth"],
                f"{row['growth_percentage']:.4f}",
            ]
        )

    return output.getvalue()


def _json_ready(result: ChartResult, generated: str | None) -> dict[str, Any]:
    return {
        "generated": generated,
        "start_date": result["start_date"].isoformat(),
        "end_date": result["end_date"].isoformat(),
        "bin_type": result["bin_type"],
        "transform": result["transform"],
        "show_data": result["show_data"],
        "baseline": result["baseline"],
        "errors": result["errors"],
        "series": [
            {
                "name": s["name"],
                "color": s["color"],
                "error": s["error"],
                "points": [
                    {
                        "date": p["date"].isoformat(),
                        "downloads": p["downloads"],
                        "change": p["change"],
                        "partial": partial,
                    }
                    for p, partial in zip(s["points"], s["is_partial_trailing"])
                ],
            }
            for s in result["series"]
        ],
        "summary": [
            {"rank": i, **row} for i, row in enumerate(result["summary"], 1)
        ],
    }


def export_json(result: ChartResult, generated: str | None = None) -> str:
    """Export the whole chart result to JSON.

    ``generated`` is an optional timestamp label; it is left null by default
    so identical inputs produce identical output.
    """
    return json.dumps(_json_ready(result, generated), indent=2)


def export_markdown(result: ChartResult) -> str:
    """Export the summary table to Markdown."""
    growth_first = result["transform"] == "normalize-y"
    lines = [
        "| Rank | Package | Total | Last Bin | Growth | Growth % |",
        "|------|---------|------:|---------:|-------:|---------:|",
    ]

    for i, row in enumerate(result["summary"], 1):
        lines.append(
            f"| {i} | {row['name']} | {row['total_downloads']:,} | "
            f"{row['last_bin_downloads']:,} | {row['growth']:+,} | "
            f"{row['growth_percentage'] * 100:+.1f}% |"
        )

    sort_label = "growth" if growth_first else "last bin downloads"
    lines.append("")
    lines.append(f"_Sorted by {sort_label}._")
    return "\n".join(lines)
