from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to sys.path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from route_engine.config import ModelConfig, SessionConfig
from route_engine.itinerary import (
    DistanceModel,
    LocationResolver,
    OptimizationSession,
    build_comparison,
    load_tables,
)
from route_engine.models import Day


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze the route of every day in an itinerary JSON file.")
    parser.add_argument("itinerary", type=Path, help="JSON file with a list of days (or an object with 'days').")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with places.csv and routes.csv replacing the built-in tables.",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=40.0,
        help="Average travel speed in km/h when estimating travel time.",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=5,
        help="Minimum minutes saved before an optimized route is worth showing.",
    )
    parser.add_argument(
        "--accept",
        action="store_true",
        help="Accept every optimization above the threshold and print the reordered itinerary.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_days(path: Path) -> list[Day]:
    if not path.exists():
        raise FileNotFoundError(f"Missing itinerary file at '{path}'.")
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("days", [])
    if not isinstance(raw, list):
        raise ValueError("Itinerary must be a list of days or an object with a 'days' list.")
    return [Day.from_dict(item) for item in raw]


def build_model(args: argparse.Namespace) -> DistanceModel:
    config = ModelConfig(average_speed_kmh=args.speed)
    if args.data_dir is None:
        return DistanceModel(LocationResolver(config=config), config=config)
    places, routes = load_tables(args.data_dir)
    return DistanceModel(LocationResolver(places, config=config), routes, config=config)


def main() -> None:
    args = parse_args()
    setup_logging(args.verbose)

    try:
        days = load_days(args.itinerary)
        model = build_model(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    session = OptimizationSession(model, config=SessionConfig(savings_threshold_minutes=args.threshold))
    states = session.analyze(days)
    output: dict = {
        "days": [
            build_comparison(state, model, savings_threshold=args.threshold).to_dict()
            for state in states.values()
        ]
    }

    if args.accept:
        for day_id in list(states):
            if session.has_meaningful_savings(day_id):
                session.accept_optimization(day_id)
        output["itinerary"] = [day.to_dict() for day in session.days]

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
