"""
Shared fixtures for the weather-scraper test suite.
"""

from unittest.mock import Mock

import pytest
import requests


def _row(label, value, unit):
    return (
        "\t<tr> \n"
        "\t\t<td width='20px'></td>  \n"
        f"\t\t<td>{label}</td> \n"
        f"\t\t<td align='right'>{value}</td> \n"
        f"\t\t<td align='left'>{unit}</td> \n"
        "\t</tr>\n"
    )


SAMPLE_ROWS = [
    ("Temperature", "29.2", "&degC"),
    ("-max last 12h", "29.7", "&degC"),
    ("-min last 12h", "16.4", "&degC"),
    ("Wind speed", "2.0", "m/s"),
    ("Wind direction", "326", "&deg"),
    ("Air pressure", "1016.3", "hPa"),
    ("Air humidity", "48.6", "%"),
    ("Global radiation", "705", "W/m<sup>2</sup>"),
    ("Precipitation last hour", "0.0", "mm (tipping bucket)"),
    ("Precipitation last hour", "0.00", "mm (disdrometer)"),
    ("Precipitation 24 hours", "0.0", "mm (tipping bucket)"),
    ("Precipitation 24 hours", "0.00", "mm (disdrometer)"),
    ("Snow depth/grass height", "0", "cm"),
]

SAMPLE_HTML = (
    "<h3>Observations from Uppsala 2019-07-25 10:20 SNT</h3>\n"
    "<table border='0' width='380' >\n"
    + "".join(_row(*r) for r in SAMPLE_ROWS)
    + "</table>\n"
)

EXPECTED = [
    ("temperature", "29.2", "°C"),
    ("temperature -max last 12h", "29.7", "°C"),
    ("temperature -min last 12h", "16.4", "°C"),
    ("wind speed", "2.0", "m/s"),
    ("wind direction", "326", "°"),
    ("air pressure", "1016.3", "hPa"),
    ("air humidity", "48.6", "%"),
    ("global radiation", "705", "W/m2"),
    ("precipitation last hour", "0.0", "mm (tipping bucket)"),
    ("precipitation last hour", "0.00", "mm (disdrometer)"),
    ("precipitation 24 hours", "0.0", "mm (tipping bucket)"),
    ("precipitation 24 hours", "0.00", "mm (disdrometer)"),
    ("snow depth/grass height", "0", "cm"),
]

SAMPLE_URL = "http://example.com/obs.htm"


def table(*rows):
    """Build a page from rows given as lists of cell markup."""
    body = "".join(
        "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>" for cells in rows
    )
    return f"<html><body><table>{body}</table></body></html>"


def make_response(body=b"", status_code=200, reason="OK", url=SAMPLE_URL):
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    resp.url = url
    resp.headers = {"Content-Type": "text/html"}
    resp.content = body
    return resp


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def fake_session():
    """A requests.Session stand-in that serves the sample page."""
    session = Mock(spec=requests.Session)
    session.get.return_value = make_response(SAMPLE_HTML.encode("utf-8"))
    return session
