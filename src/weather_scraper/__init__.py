"""weather-scraper core library.

Periodically scrapes a weather observation page, turns its table rows into
(name, value, unit) measurements and hands the interesting ones to a
publishing sink.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
