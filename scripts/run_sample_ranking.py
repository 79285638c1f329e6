#!/usr/bin/env python3
"""Sample ranking harness for end-to-end validation.

Runs the full ranking pipeline against the saved snapshot in
tests/fixtures/stations_sample.json (no network needed) and prints the
ranked stations plus a diagnostics table.

Usage:
    # Rank the snapshot around Puerta del Sol
    python scripts/run_sample_ranking.py

    # Another origin, bounded to 3 km
    python scripts/run_sample_ranking.py --lat 40.4378 --lon -3.7058 --radius-km 3

    # Live fuel-price service instead of the snapshot
    SAMPLE_RANKING_REAL_RUN=1 python scripts/run_sample_ranking.py
"""

import argparse
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from station_ranker.config.models import AppConfig
from station_ranker.location import StaticLocationProvider
from station_ranker.logging.config import configure_logging
from station_ranker.pipeline import RankingPipeline
from station_ranker.presentation import ResultRenderer

DEFAULT_SNAPSHOT = Path(__file__).parent.parent / "tests" / "fixtures" / "stations_sample.json"


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(run_result):
    """Print a formatted summary table of batch diagnostics."""
    print_header("Ranking Summary")

    result = run_result.result
    metrics = [
        ("Outcome", "ok" if run_result.ok else type(run_result.error).__name__),
        ("Records Fetched", result.fetched_count if result else "-"),
        ("Records Normalized", result.normalized_count if result else "-"),
        ("Records Rejected", result.rejected_count if result else "-"),
        ("Records In Range", result.in_range_count if result else "-"),
        ("Stations Returned", len(result) if result else 0),
        ("Duration (seconds)", f"{run_result.duration_seconds:.2f}"),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")

    if result and result.rejections:
        print("\nRejections by reason:")
        for reason, count in sorted(result.rejections.items()):
            print(f"  {reason}: {count}")


def main():
    """Main entry point for the sample ranking harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample ranking for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--snapshot", type=Path, default=DEFAULT_SNAPSHOT, help="Snapshot JSON file")
    parser.add_argument("--lat", type=float, default=40.4168, help="Origin latitude (default: Puerta del Sol)")
    parser.add_argument("--lon", type=float, default=-3.7038, help="Origin longitude (default: Puerta del Sol)")
    parser.add_argument("--top-k", type=int, default=6, help="Number of stations (default: 6)")
    parser.add_argument("--radius-km", type=float, default=None, help="Optional radius bound")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    args = parser.parse_args()

    load_dotenv()
    use_real_endpoint = os.environ.get("SAMPLE_RANKING_REAL_RUN", "0") == "1"

    print_header("Station Ranker - Sample Ranking Harness")

    if use_real_endpoint:
        print("⚠️  REAL ENDPOINT MODE ENABLED")
        print("   The full national station list will be downloaded (several MB).")
        source = {"type": "minetur"}
    else:
        if not args.snapshot.exists():
            print(f"❌ Error: Snapshot file not found: {args.snapshot}")
            return 1
        print(f"Snapshot: {args.snapshot}")
        source = {"type": "file", "path": str(args.snapshot)}

    print(f"Origin: {args.lat}, {args.lon}")

    configure_logging(level=args.log_level, format_type="key-value", environment="validation")

    app_config = AppConfig.model_validate(
        {
            "source": source,
            "location": {"type": "static", "latitude": args.lat, "longitude": args.lon},
            "ranking": {"top_k": args.top_k, "radius_km": args.radius_km},
        }
    )

    pipeline = RankingPipeline(app_config, StaticLocationProvider(args.lat, args.lon))
    run_result = pipeline.run()

    print_header("Ranked Stations")
    print(ResultRenderer(price_field=app_config.display.price_field).render_text(run_result))

    print_summary_table(run_result)

    return 0 if run_result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
