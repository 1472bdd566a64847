"""Dashboard report runner: load records, build the dashboard, render markdown."""
import argparse
import logging
from datetime import date
from pathlib import Path

from .config import load_settings
from .loader import load_records
from .models import (
    AverageRollup,
    CaseDashboard,
    Dashboard,
    DistributionSlice,
    RankingEntry,
    SeriesDimension,
    TaskDashboard,
    ViewMode,
    ViewSelection,
)
from .orchestrator import builder_for


def _format_average(rollup: AverageRollup, unit: str) -> str:
    if rollup.average is None:
        return "N/A"
    return f"{rollup.average:.2f} {unit} (from {rollup.count})"


def _distribution_lines(slices: list[DistributionSlice]) -> list[str]:
    if not slices:
        return ["_No data_", ""]
    lines = [f"- {s.label}: {s.value}" for s in slices]
    lines.append("")
    return lines


def _ranking_lines(title: str, entries: list[RankingEntry], limit: int = 5) -> list[str]:
    lines = [f"### {title}"]
    if not entries:
        lines.extend(["_No data_", ""])
        return lines
    lines.extend(
        f"{i}. {entry.identity.display_name} ({entry.count})"
        for i, entry in enumerate(entries[:limit], 1)
    )
    lines.append("")
    return lines


def _bar_table(dashboard: Dashboard) -> list[str]:
    chart = dashboard.bar_chart
    if not chart.points:
        return ["_No data_", ""]
    header = ["Period", *(series.label for series in chart.series)]
    lines = [
        "| " + " | ".join(header) + " |",
        "|" + "---|" * len(header),
    ]
    for point in chart.points:
        cells = [point.period_label, *(str(point.counts[series.key]) for series in chart.series)]
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")
    return lines


def dashboard_to_markdown(dashboard: Dashboard) -> str:
    """Convert a dashboard to markdown."""
    window = dashboard.window
    period = "All time" if window.is_unbounded else f"{window.start or '...'} to {window.end or '...'}"
    lines = [
        "# Analytics Report",
        f"**Period:** {period}\n",
        f"## {dashboard.bar_chart.title}",
        *_bar_table(dashboard),
        "## Period Summary",
        f"- **Total:** {dashboard.summary.total}",
        *[f"- **{key}:** {count}" for key, count in dashboard.summary.counts.items()],
        "",
        "## Priority Distribution",
        *_distribution_lines(dashboard.priority_distribution),
    ]

    if isinstance(dashboard, CaseDashboard):
        rankings = dashboard.rankings
        lines.extend([
            "## Type Distribution",
            *_distribution_lines(dashboard.type_distribution),
            "## Category Distribution",
            *_distribution_lines(dashboard.category_distribution),
            "## Average Rating",
            _format_average(dashboard.average_rating, "/ 5"),
            "",
            "## Rankings",
            *_ranking_lines("Signal givers", rankings.creators),
            *_ranking_lines("Solution providers", rankings.solution_providers),
            *_ranking_lines("Approvers", rankings.approvers),
            *_ranking_lines("Raters", rankings.raters),
        ])
    elif isinstance(dashboard, TaskDashboard):
        rankings = dashboard.rankings
        lines.extend([
            "## Status Distribution",
            *_distribution_lines(dashboard.status_distribution),
            "## Average Completion Time",
            _format_average(dashboard.average_completion, "days"),
            "",
            "## Rankings",
            *_ranking_lines("Creators", rankings.creators),
            *_ranking_lines("Completers", rankings.completers),
            *_ranking_lines("Commenters", rankings.commenters),
            "### Fastest completers",
        ])
        if rankings.fastest:
            lines.extend(
                f"{i}. {entry.identity.display_name} ({entry.average_days:.2f} days, {entry.count} tasks)"
                for i, entry in enumerate(rankings.fastest[:5], 1)
            )
        else:
            lines.append("_No data_")
        lines.append("")

    return "\n".join(lines)


def run_report(
    export_file: Path,
    kind: str,
    selection: ViewSelection,
    dimension: SeriesDimension | None = None,
    output: Path | None = None,
) -> Dashboard:
    """Load an export, build its dashboard and print the report."""
    print("=== Analytics Report ===\n")

    print(f"Loading {kind} records from {export_file}...")
    records = load_records(export_file, kind)
    print(f"Loaded {len(records)} records\n")

    builder = builder_for(kind)
    dashboard = builder.build(records, selection, dimension)
    if dashboard.selection.year != selection.year:
        print(f"No data for {selection.year}, showing {dashboard.selection.year}\n")

    md_content = dashboard_to_markdown(dashboard)
    print(md_content)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(md_content, encoding="utf-8")
        print(f"✓ Saved to {output}")

    return dashboard


def _parse_args(argv=None) -> argparse.Namespace:
    today = date.today()
    default = ViewSelection.current(today)
    parser = argparse.ArgumentParser(description="Case/task analytics report")
    parser.add_argument("export_file", type=Path, nargs="?")
    parser.add_argument("--kind", choices=["case", "task"], default="case")
    parser.add_argument("--mode", choices=[m.value for m in ViewMode], default=ViewMode.ALL.value)
    parser.add_argument("--year", type=int, default=default.year)
    parser.add_argument("--month", type=int, default=default.month)
    parser.add_argument("--week", type=int, default=default.week)
    parser.add_argument("--start", type=date.fromisoformat, default=None)
    parser.add_argument("--end", type=date.fromisoformat, default=None)
    parser.add_argument("--dimension", choices=[d.value for d in SeriesDimension], default=None)
    parser.add_argument("--output", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv=None) -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    args = _parse_args(argv)
    export_file = args.export_file or settings.data_dir / f"{args.kind}s.json"
    selection = ViewSelection(
        mode=ViewMode(args.mode),
        year=args.year,
        month=args.month,
        week=args.week,
    ).with_custom_end(args.end).with_custom_start(args.start)
    dimension = SeriesDimension(args.dimension) if args.dimension else None
    run_report(export_file, args.kind, selection, dimension, args.output)


if __name__ == "__main__":
    main()
