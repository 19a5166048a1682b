from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from bs4.element import PageElement

from .markup import node_text

ROW_WIDTH = 4
CONTINUATION_PREFIX = "-"


@dataclass(frozen=True)
class Measurement:
    name: str
    value: str
    unit: str


class RowNormalizer:
    """Turn table rows into measurements.

    Rows are expected as ``[spacer, label, value, unit]``. A label starting
    with ``-`` continues the previous primary row, so "Temperature" followed
    by "-max last 12h" yields "temperature -max last 12h".

    One normalizer holds the state of one extraction; do not share it
    between extractions.
    """

    def __init__(self) -> None:
        self._last_primary: Measurement | None = None

    def normalize(self, cells: Sequence[PageElement | None]) -> Measurement | None:
        if len(cells) != ROW_WIDTH:
            return None

        name = node_text(cells[1]).strip().lower()
        value = node_text(cells[2])
        unit = node_text(cells[3])

        last = self._last_primary
        if name and last is not None and last.name and name.startswith(
            CONTINUATION_PREFIX
        ):
            return Measurement(name=f"{last.name} {name}", value=value, unit=unit)

        measurement = Measurement(name=name, value=value, unit=unit)
        self._last_primary = measurement
        return measurement


def normalize_rows(rows: Iterable[Sequence[PageElement | None]]) -> list[Measurement]:
    normalizer = RowNormalizer()
    out: list[Measurement] = []
    for cells in rows:
        measurement = normalizer.normalize(cells)
        if measurement is not None:
            out.append(measurement)
    return out
