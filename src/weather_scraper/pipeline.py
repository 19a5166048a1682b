from __future__ import annotations

import logging

from bs4.element import PageElement

from .dispatch import DispatchMap
from .errors import EmptyDocumentError
from .http_client import HttpClient, fetch_document
from .markup import DEFAULT_PARSER, find_descendants
from .measurements import Measurement, normalize_rows
from .sinks import Sink

logger = logging.getLogger(__name__)


def parse_measurements(document: PageElement | None) -> list[Measurement]:
    if document is None:
        raise EmptyDocumentError()

    rows = (find_descendants(tr, "td") for tr in find_descendants(document, "tr"))
    return normalize_rows(rows)


def extract(
    http: HttpClient, url: str, *, parser: str = DEFAULT_PARSER
) -> list[Measurement]:
    logger.info("Trying to fetch %s", url)
    document = fetch_document(http, url, parser=parser)
    measurements = parse_measurements(document)
    for m in measurements:
        logger.debug("%s: %s (%s)", m.name, m.value, m.unit)
    return measurements


def scrape_and_publish(
    http: HttpClient,
    url: str,
    *,
    dispatch_map: DispatchMap,
    sink: Sink,
    parser: str = DEFAULT_PARSER,
) -> int:
    """One scheduler cycle: extract the page and publish routed values."""

    measurements = extract(http, url, parser=parser)
    return dispatch_map.dispatch(measurements, sink)
