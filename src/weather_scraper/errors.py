from __future__ import annotations


class ScraperError(Exception):
    pass


class ConfigError(ScraperError):
    pass


class SinkError(ScraperError):
    pass


class FetchError(ScraperError):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(url, f"Failed to fetch {url}: {cause}")
        self.cause = cause


class HTTPStatusError(FetchError):
    def __init__(self, url: str, status: int, status_text: str) -> None:
        super().__init__(url, f"http error {status:03d}: {status_text}")
        self.status = status
        self.status_text = status_text


class ParseError(ScraperError):
    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Failed to parse {url}: {cause}")
        self.url = url
        self.cause = cause


class EmptyDocumentError(ScraperError):
    def __init__(self) -> None:
        super().__init__("nil body")
