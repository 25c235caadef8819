"""
stormrank Command Line Interface (CLI)
======================================

Run it like:

    stormrank --csv repdata_data_StormData.csv.bz2
    python -m stormrank --csv StormData.csv --top 5 --view health
    stormrank --csv StormData.csv --export-csv health.csv --report storms.docx

It loads the file once, runs the requested views and prints each ranked
table. The CLI DOES NOT modify the dataset file.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional
from .loader import load_storm_data
from .engine import StormRank, View, HEALTH_VIEW, ECONOMIC_VIEW, get_view
from .rank import DEFAULT_TOP_N


def _selected_views(name: str) -> List[View]:
    if name == "both":
        return [HEALTH_VIEW, ECONOMIC_VIEW]
    return [get_view(name)]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="stormrank", description="Rank storm event types by health and economic harm.")
    ap.add_argument("--csv", required=True, help="Path to a Storm Data export (.csv, .csv.bz2, .xlsx)")
    ap.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Number of categories per view (default 10)")
    ap.add_argument("--view", choices=["health", "economic", "both"], default="both")
    ap.add_argument("--export-csv", help="Write the tidy rows of the selected view(s) to CSV")
    ap.add_argument("--export-json", help="Write the tidy rows of the selected view(s) to JSON")
    ap.add_argument("--report", help="Write a DOCX report with charts")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    return ap


def _export_path(path: str, view: View, n_views: int) -> str:
    # one file per view when both views are exported
    if n_views == 1:
        return path
    stem, ext = os.path.splitext(path)
    return f"{stem}_{view.name}{ext}"


def run(args: argparse.Namespace) -> int:
    print("Loading dataset...")
    records = load_storm_data(args.csv)
    engine = StormRank(records=records, dataset_path=args.csv)
    engine.command_log.append(" ".join(["stormrank"] + sys.argv[1:]))
    print(f"Loaded {len(records)} records ({engine.distinct_labels()} distinct event labels).")

    views = _selected_views(args.view)
    for view in views:
        print("")
        print(f"{view.title} (top {args.top}):")
        _print_rows(engine.ranked(view, args.top), view)

        if args.export_csv:
            p = _export_path(args.export_csv, view, len(views))
            engine.export_csv(p, view, args.top)
            print(f"Exported CSV to {p}")
        if args.export_json:
            p = _export_path(args.export_json, view, len(views))
            engine.export_json(p, view, args.top)
            print(f"Exported JSON to {p}")

    if args.report:
        from .report import generate_docx_report, ReportConfig
        cfg = ReportConfig(top_n=args.top, command_log=engine.command_log, views=tuple(views))
        generate_docx_report(engine, args.report, config=cfg)
        print(f"Report written to {args.report}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the stormrank CLI."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        return run(args)
    except Exception as e:
        print(f"Error: {e}")
        return 1


def _print_rows(rows, view: View) -> None:
    for pos, r in enumerate(rows, start=1):
        metrics = " ".join(f"{m}={r.value(m):,.0f}" for m in view.metric_names)
        print(f"[{pos}] {r.category} | {metrics}")

if __name__ == "__main__":
    sys.exit(main())
