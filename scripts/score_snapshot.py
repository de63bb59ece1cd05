#!/usr/bin/env python
"""Score Snapshot - offline leaderboard and per-app breakdown.

Runs the same scoring engine as the API over a snapshot file and prints
the result.

Usage:
    # Leaderboard for the configured snapshot
    python scripts/score_snapshot.py

    # Leaderboard for a specific file, as JSON
    python scripts/score_snapshot.py --snapshot data/snapshot.json --json

    # Per-query and per-category breakdown for one app
    python scripts/score_snapshot.py --app libby
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, ".")

from api.config import get_settings  # noqa: E402
from api.exceptions import BenchError  # noqa: E402
from api.logging import setup_logging  # noqa: E402
from api.services.snapshot_service import SnapshotService  # noqa: E402
from worker.scoring import AppScoreReport, Leaderboard  # noqa: E402


def print_leaderboard(leaderboard: Leaderboard) -> None:
    """Print a human-readable leaderboard."""
    print("=" * 70)
    print("LEADERBOARD")
    print("=" * 70)
    print(
        f"Golden coverage: {leaderboard.golden_coverage}/{leaderboard.total_queries} queries"
        f" | Max possible score: {leaderboard.max_possible_score:g}"
    )

    if not leaderboard.apps:
        print("\nNo apps to rank.")
        return

    print(f"\n{'#':>3}  {'App':<24} {'Score':>12} {'%':>6}  {'Band':<10} {'Entered':>7}")
    for report in leaderboard.apps:
        score = f"{report.total_score:g}/{report.max_score:g}"
        print(
            f"{report.rank:>3}  {report.app_name[:24]:<24} {score:>12} "
            f"{report.percentage:>6.1f}  {report.band.value:<10} "
            f"{report.queries_with_results:>7}"
        )


def print_app_report(report: AppScoreReport) -> None:
    """Print one app's breakdown by category and by query."""
    print("=" * 70)
    print(f"APP REPORT: {report.app_name} ({report.app_id})")
    print("=" * 70)
    print(
        f"Score: {report.total_score:g}/{report.max_score:g} "
        f"({report.percentage:.1f}%, {report.band.value})"
    )
    print(f"Queries scored: {report.queries_scored}")
    print(f"Queries with results: {report.queries_with_results}")

    if report.category_scores:
        print("\n--- BY CATEGORY ---")
        for category, bucket in report.category_scores.items():
            print(
                f"  {category:<20} {bucket.total_score:g}/{bucket.max_score:g} "
                f"({bucket.percentage:.1f}%) over {bucket.queries_scored} queries"
            )

    if report.query_scores:
        print("\n--- BY QUERY ---")
        for detail in report.query_scores:
            print(
                f"  Q{detail.query_index:<3} {detail.query_text[:30]:<30} "
                f"hits {detail.hits}/{detail.golden_count}  "
                f"matched {detail.matched_results}  "
                f"bonus {detail.position_bonuses}  "
                f"{detail.score:g}/{detail.max_score:g}"
            )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Score recorded app results against golden sets"
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=None,
        help="Snapshot JSON file (defaults to SNAPSHOT_PATH setting)",
    )
    parser.add_argument(
        "--app",
        type=str,
        default=None,
        help="Show the breakdown for a single app id instead of the leaderboard",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print raw JSON instead of a table",
    )

    args = parser.parse_args(argv)

    setup_logging(stream=sys.stderr)
    path = Path(args.snapshot) if args.snapshot else get_settings().snapshot_path
    service = SnapshotService(path)

    try:
        if args.app:
            report = service.app_report(args.app)
            if args.json:
                print(json.dumps(report.to_dict(), indent=2))
            else:
                print_app_report(report)
        else:
            leaderboard = service.leaderboard()
            if args.json:
                print(json.dumps(leaderboard.to_dict(), indent=2))
            else:
                print_leaderboard(leaderboard)
    except BenchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
