from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from bs4 import FeatureNotFound

from .errors import ConfigError
from .markup import DEFAULT_PARSER, parse_html
from .scheduler import MIN_INTERVAL_S

DEFAULT_URL = "http://celsius.met.uu.se/geocelsiuswww/obs_uppsala.htm"
DEFAULT_INTERVAL_S = 600
DEFAULT_DEVICE_NAME = "outside"


@dataclass
class ScraperConfig:
    url: str = DEFAULT_URL
    interval_s: float = DEFAULT_INTERVAL_S
    device_name: str = DEFAULT_DEVICE_NAME
    timeout_s: float | None = None
    parser: str = DEFAULT_PARSER
    out: Path | None = None

    def validate(self) -> None:
        if self.interval_s < MIN_INTERVAL_S:
            raise ConfigError(f"scrape interval must be >= {MIN_INTERVAL_S}")
        if not self.url.strip():
            raise ConfigError("scrape URL must not be empty")
        if urlparse(self.url).scheme.lower() not in {"http", "https"}:
            raise ConfigError(f"scrape URL must be http(s): {self.url}")
        if not self.device_name.strip():
            raise ConfigError("device name must not be empty")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ConfigError("timeout must be positive")
        try:
            parse_html("", parser=self.parser)
        except FeatureNotFound as e:
            raise ConfigError(f"unknown HTML parser {self.parser!r}: {e}") from e
