"""Command-line entry point for Station Ranker."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Optional, Sequence, Tuple

from station_ranker.adapters.exceptions import AdapterConfigurationError
from station_ranker.config.environment import EnvironmentConfig
from station_ranker.config.exceptions import ConfigurationError
from station_ranker.config.loader import load_config, parse_app_config
from station_ranker.config.models import AppConfig, LocationType
from station_ranker.location import LocationError, get_location_provider
from station_ranker.logging import get_logger
from station_ranker.logging.config import configure_logging
from station_ranker.pipeline import RankingPipeline, RankingRunResult, RankingSession
from station_ranker.presentation import ResultRenderer
from station_ranker.scheduler import WatchService

logger = get_logger(__name__, component="cli")


def apply_cli_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Return app_config with command-line overrides applied and revalidated.

    Raises:
        ConfigurationError: If an override produces an invalid configuration
    """
    data = app_config.model_dump()

    if args.lat is not None and args.lon is not None:
        data["location"].update(
            type=LocationType.STATIC.value, latitude=args.lat, longitude=args.lon
        )
    if args.top_k is not None:
        data["ranking"]["top_k"] = args.top_k
    if args.radius_km is not None:
        data["ranking"]["radius_km"] = args.radius_km

    return parse_app_config(data)


def load_runtime_config(args: argparse.Namespace) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(args.config)
    app_config = apply_cli_overrides(app_config, args)

    if args.log_level:
        env_config.log_level = args.log_level
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Station Ranker - find the nearest fuel stations and their prices"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml)",
    )
    parser.add_argument("--lat", type=float, default=None, help="Latitude of your location")
    parser.add_argument("--lon", type=float, default=None, help="Longitude of your location")
    parser.add_argument("--top-k", type=int, default=None, help="Number of stations to show")
    parser.add_argument(
        "--radius-km", type=float, default=None, help="Ignore stations farther than this"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and re-rank whenever the location changes",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def _make_printer(renderer: ResultRenderer, output_format: str):
    lock = threading.Lock()

    def print_result(run_result: RankingRunResult) -> None:
        if output_format == "json":
            output = renderer.render_json(run_result) + "\n"
        else:
            output = renderer.render_text(run_result)
        with lock:
            sys.stdout.write(output)
            sys.stdout.flush()

    return print_result


def run_watch_mode(
    pipeline: RankingPipeline, app_config: AppConfig, print_result, start_time: float
) -> int:
    """Poll the location and print every newest result until interrupted."""
    shutdown_event = threading.Event()
    session = RankingSession(pipeline, on_result=print_result)
    watch_service = WatchService(
        refresh_callable=session.refresh,
        interval_seconds=app_config.watch_interval_seconds,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        watch_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    watch_service.start()

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        watch_service.shutdown(wait=False)
    finally:
        session.close(wait=False)

    logger.info(
        "Station Ranker stopped",
        extra={
            "event": "service.stopping",
            "uptime_seconds": round(time.time() - start_time, 2),
        },
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 on configuration errors or a failed run
    """
    start_time = time.time()
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")

    try:
        app_config, env_config = load_runtime_config(args)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Station Ranker starting",
            extra={
                "event": "service.starting",
                "source_type": app_config.source.type,
                "location_type": app_config.location.type,
                "top_k": app_config.ranking.top_k,
                "radius_km": app_config.ranking.radius_km,
                "watch": args.watch,
            },
        )

        location_provider = get_location_provider(app_config.location, app_config.advanced)
        pipeline = RankingPipeline(app_config, location_provider)
        renderer = ResultRenderer(price_field=app_config.display.price_field)
        print_result = _make_printer(renderer, args.format)

        if args.watch:
            return run_watch_mode(pipeline, app_config, print_result, start_time)

        run_result = pipeline.run()
        print_result(run_result)
        return 0 if run_result.ok else 1

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except (LocationError, AdapterConfigurationError) as e:
        print(f"Setup Error: {e}", file=sys.stderr)
        logger.error(
            f"Setup error: {e}",
            extra={"event": "service.setup.failed", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
