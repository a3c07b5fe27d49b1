#!/usr/bin/env python3
"""
Play Report - Main Runner

Local runner for building session reports from exported gameplay telemetry.

Usage:
    python main.py demo                              # Report the bundled mock data
    python main.py report game_data.json             # Print reports for every player
    python main.py report game_data.json --player ana --json
"""

import json
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from playreport.records import TelemetryError
from playreport.pipeline import build_player_reports
from playreport.report import Report

MOCK_DATA = Path(__file__).parent / "mock_data" / "game_data.json"


def load_entries(path: Path) -> List[Dict[str, Any]]:
    """Load a JSON array of raw telemetry events."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of events")
    return data


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60)


def print_section(text: str):
    """Print a formatted section header."""
    print(f"\n--- {text} ---")


def print_report(report: Report):
    print_section(f"{report.session_label} ({report.session_date})")
    print(f"Duration:         {report.duration}")
    print(f"Score:            {report.to_dict()['score']}")
    print(f"Dominant emotion: {report.dominant_emotion}")
    print(f"Engagement:       {report.engagement_text}")

    print("\nLevels:")
    for level in report.levels:
        status = "✓" if level.completed else "✗"
        summary = level.summary()
        print(f"  {status} {level.name}: score {summary['totalScore']}, "
              f"words completed {level.words_completed}")

    print("\nEmotions:")
    for card in report.emotion_cards:
        if card.count:
            print(f"  • {card.name}: {card.count} ({card.percentage}%) - {card.description}")

    print("\nObservations:")
    for insight in report.insights:
        print(f"  • {insight}")


def run_report(path: Path, player: str = None, as_json: bool = False) -> int:
    """Build and print reports for a telemetry export. Returns an exit code."""
    try:
        reports_by_player = build_player_reports(load_entries(path))
    except TelemetryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if player is not None:
        reports_by_player = {player: reports_by_player.get(player, [])}

    if as_json:
        output = {
            username: [report.to_dict() for report in reports]
            for username, reports in reports_by_player.items()
        }
        print(json.dumps(output, indent=2))
        return 0

    for username, reports in reports_by_player.items():
        print_header(f"{username} - {len(reports)} session(s)")
        if not reports:
            print("\nNo sessions recorded yet")
        for report in reports:
            print_report(report)
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Play Report - Session Segmentation & Emotion Reporting"
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default="demo",
        choices=["demo", "report"],
        help="Run mode: demo (bundled mock data) or report (telemetry file)"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="JSON array of telemetry events (report mode)"
    )
    parser.add_argument(
        "--player",
        type=str,
        help="Only report this player"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log segmentation details"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.mode == "demo":
        sys.exit(run_report(MOCK_DATA, args.player, args.json))
    elif args.mode == "report":
        if args.file is None:
            parser.error("report mode needs a telemetry file")
        sys.exit(run_report(args.file, args.player, args.json))


if __name__ == "__main__":
    main()
