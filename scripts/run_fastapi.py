from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn

# Add project root to sys.path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from route_engine.http_api import create_fastapi_app


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve itinerary route analysis over HTTP.")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument(
        "--origins",
        nargs="*",
        default=None,
        help="Allowed CORS origins for the itinerary editor (defaults include localhost:3000).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with places.csv and routes.csv; overrides ROUTE_ENGINE_DATA_DIR.",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Average travel speed in km/h; overrides ROUTE_ENGINE_AVG_SPEED_KMH.",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Log level for route_engine and uvicorn.",
    )
    return parser.parse_args()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    # dependencies read the environment lazily, on the first request
    if args.data_dir is not None:
        if not (args.data_dir / "places.csv").exists():
            raise SystemExit(f"Error: no places.csv in '{args.data_dir}'.")
        os.environ["ROUTE_ENGINE_DATA_DIR"] = str(args.data_dir)
    if args.speed is not None:
        os.environ["ROUTE_ENGINE_AVG_SPEED_KMH"] = str(args.speed)

    app = create_fastapi_app(allowed_origins=args.origins)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
