from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, TextIO

from .dispatch import Device, FeatureTarget
from .errors import SinkError

logger = logging.getLogger(__name__)


def utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class Sink:
    """Receives routed measurement values.

    Delivery guarantees (buffering, retry, encoding) belong to the sink.
    """

    def connect(self, devices: tuple[Device, ...]) -> None:
        pass

    def publish(self, target: FeatureTarget, value: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class LogSink(Sink):
    def connect(self, devices: tuple[Device, ...]) -> None:
        for device in devices:
            logger.info("Device %s (%s) on %s", device.name, device.type, device.topic)

    def publish(self, target: FeatureTarget, value: str) -> None:
        logger.info("%s = %s", target.identifier, value)


class JsonlSink(Sink):
    """Append device announcements and updates to a JSON-lines file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._fh: TextIO | None = None

    def connect(self, devices: tuple[Device, ...]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a", encoding="utf-8", newline="\n")
        except OSError as e:
            raise SinkError(f"Cannot open {self.path}: {e}") from e

        for device in devices:
            self._append({"event": "device", **asdict(device)})

    def publish(self, target: FeatureTarget, value: str) -> None:
        self._append(
            {
                "event": "update",
                "topic": target.topic,
                "feature": target.feature,
                "value": value,
            }
        )

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def _append(self, event: dict[str, Any]) -> None:
        if self._fh is None:
            raise SinkError("JsonlSink used before connect()")
        event = dict(event)
        event.setdefault("at", utc_iso())
        try:
            self._fh.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._fh.flush()
        except OSError as e:
            raise SinkError(f"Cannot write to {self.path}: {e}") from e
