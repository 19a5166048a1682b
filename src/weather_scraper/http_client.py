from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from requests import exceptions as req_exc

from . import __version__
from .errors import HTTPStatusError, ParseError, TransportError
from .markup import DEFAULT_PARSER, parse_html

logger = logging.getLogger(__name__)

USER_AGENT = f"weather-scraper/{__version__}"


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    body: bytes


class HttpClient:
    """Single-shot HTTP GET.

    There are no retries; the next scheduled scrape is the retry. With
    ``timeout_s=None`` requests waits as long as the server keeps the
    connection open.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._headers = {"User-Agent": USER_AGENT, **(headers or {})}

    def get(self, url: str) -> FetchResult:
        try:
            resp = self._session.get(
                url, timeout=self._timeout_s, headers=self._headers
            )
            # Always drain the body so the pooled connection can be reused.
            body = resp.content
        except req_exc.RequestException as e:
            raise TransportError(url, e) from e

        if resp.status_code != 200:
            raise HTTPStatusError(url, int(resp.status_code), str(resp.reason or ""))

        return FetchResult(
            url=url,
            final_url=str(resp.url),
            status_code=int(resp.status_code),
            body=body,
        )


def fetch_document(
    http: HttpClient, url: str, *, parser: str = DEFAULT_PARSER
) -> BeautifulSoup:
    result = http.get(url)
    logger.debug("Fetched %s (%d bytes)", result.final_url, len(result.body))
    try:
        return parse_html(result.body, parser=parser)
    except ParserRejectedMarkup as e:
        raise ParseError(url, e) from e
