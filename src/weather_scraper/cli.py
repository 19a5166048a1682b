from __future__ import annotations

import argparse
import functools
import logging
import sys
from pathlib import Path

import requests

from .config import (
    DEFAULT_DEVICE_NAME,
    DEFAULT_INTERVAL_S,
    DEFAULT_URL,
    ScraperConfig,
)
from .dispatch import weather_station_map
from .errors import ConfigError, ScraperError, SinkError
from .http_client import HttpClient
from .markup import DEFAULT_PARSER
from .pipeline import extract, scrape_and_publish
from .scheduler import Scheduler, install_signal_handlers
from .sinks import JsonlSink, LogSink, Sink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="weather-scraper",
        description="Scrape weather observations and publish them to a sink",
    )
    p.add_argument("--scrape-url", dest="url", default=DEFAULT_URL)
    p.add_argument(
        "--scrape-interval",
        dest="interval",
        type=float,
        default=DEFAULT_INTERVAL_S,
        help="Seconds between scrapes (>= 1)",
    )
    p.add_argument(
        "--device-name",
        default=DEFAULT_DEVICE_NAME,
        help="Device name used in published topics",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP deadline in seconds (default: none)",
    )
    p.add_argument(
        "--parser",
        default=DEFAULT_PARSER,
        help="BeautifulSoup tree builder",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Append published values to this JSON-lines file instead of the log",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
    )
    p.add_argument(
        "--once",
        action="store_true",
        help="Scrape once, print all measurements and exit",
    )
    return p


def _config_from_args(args: argparse.Namespace) -> ScraperConfig:
    return ScraperConfig(
        url=args.url,
        interval_s=args.interval,
        device_name=args.device_name,
        timeout_s=args.timeout,
        parser=args.parser,
        out=args.out,
    )


def _run_once(http: HttpClient, config: ScraperConfig) -> int:
    try:
        measurements = extract(http, config.url, parser=config.parser)
    except ScraperError as e:
        print(str(e), file=sys.stderr)
        return 1
    for m in measurements:
        print(f"{m.name}: {m.value} ({m.unit})")
    return 0


def _run_daemon(http: HttpClient, config: ScraperConfig) -> int:
    dispatch_map = weather_station_map(config.device_name)
    sink: Sink = JsonlSink(config.out) if config.out is not None else LogSink()
    try:
        sink.connect(dispatch_map.devices)
    except SinkError as e:
        logger.error("Error starting sink: %s", e)
        return 1

    job = functools.partial(
        scrape_and_publish,
        http,
        config.url,
        dispatch_map=dispatch_map,
        sink=sink,
        parser=config.parser,
    )
    try:
        scheduler = Scheduler(job, interval_s=config.interval_s)
        install_signal_handlers(scheduler)
        scheduler.run()
    finally:
        sink.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _config_from_args(args)
    try:
        config.validate()
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        return 2

    session = requests.Session()
    try:
        http = HttpClient(session, timeout_s=config.timeout_s)
        if bool(args.once):
            return _run_once(http, config)
        return _run_daemon(http, config)
    finally:
        session.close()


if __name__ == "__main__":
    raise SystemExit(main())
