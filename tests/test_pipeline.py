"""
Tests for the extraction pipeline.
"""

import logging
from unittest.mock import Mock

import pytest
import requests

from conftest import EXPECTED, SAMPLE_URL, make_response

from weather_scraper.dispatch import weather_station_map
from weather_scraper.errors import EmptyDocumentError, HTTPStatusError
from weather_scraper.http_client import HttpClient
from weather_scraper.markup import parse_html
from weather_scraper.pipeline import extract, parse_measurements, scrape_and_publish


class RecordingSink:
    def __init__(self):
        self.published = []

    def publish(self, target, value):
        self.published.append((target.identifier, value))


class TestParseMeasurements:
    def test_none_document(self):
        with pytest.raises(EmptyDocumentError):
            parse_measurements(None)

    def test_page_without_rows_is_empty(self):
        assert parse_measurements(parse_html("<p>No data today</p>")) == []

    def test_rows_across_tables_share_continuation(self):
        html = (
            "<table><tr><td></td><td>Temperature</td><td>1</td><td>C</td></tr></table>"
            "<table><tr><td></td><td>-max</td><td>2</td><td>C</td></tr></table>"
        )
        got = parse_measurements(parse_html(html))
        assert [m.name for m in got] == ["temperature", "temperature -max"]


class TestExtract:
    def test_sample_page(self, fake_session):
        got = extract(HttpClient(fake_session), SAMPLE_URL)
        assert len(got) == 13
        assert [(m.name, m.value, m.unit) for m in got] == EXPECTED

    def test_http_failure_yields_no_measurements(self):
        session = Mock(spec=requests.Session)
        session.get.return_value = make_response(
            b"<html>oops</html>", status_code=500, reason="Internal Server Error"
        )
        with pytest.raises(HTTPStatusError):
            extract(HttpClient(session), SAMPLE_URL)

    def test_logs_fetch_and_measurements(self, fake_session, caplog):
        with caplog.at_level(logging.DEBUG, logger="weather_scraper.pipeline"):
            extract(HttpClient(fake_session), SAMPLE_URL)
        assert f"Trying to fetch {SAMPLE_URL}" in caplog.text
        assert "wind speed: 2.0 (m/s)" in caplog.text


class TestScrapeAndPublish:
    def test_publishes_routed_values(self, fake_session):
        sink = RecordingSink()
        count = scrape_and_publish(
            HttpClient(fake_session),
            SAMPLE_URL,
            dispatch_map=weather_station_map("outside"),
            sink=sink,
        )
        assert count == 7
        assert sink.published[0] == (
            "sensor/temperature/outside/currentTemperature",
            "29.2",
        )
        assert ("sensor/weather/outside/precipitation", "0.00") in sink.published


class TestDeepPages:
    def test_row_below_deep_nesting_is_extracted(self):
        depth = 3000
        html = (
            "<div>" * depth
            + "<table><tr><td></td><td>Wind speed</td><td>2.0</td><td>m/s</td>"
            + "</tr></table>"
            + "</div>" * depth
        )
        got = parse_measurements(parse_html(html))
        assert [(m.name, m.value, m.unit) for m in got] == [
            ("wind speed", "2.0", "m/s")
        ]
