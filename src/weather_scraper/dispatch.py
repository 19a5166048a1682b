from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .measurements import Measurement

if TYPE_CHECKING:
    from .sinks import Sink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureInfo:
    min: float | None = None
    max: float | None = None
    step: float | None = None


@dataclass(frozen=True)
class Device:
    topic: str
    name: str
    type: str
    features: Mapping[str, FeatureInfo] = field(default_factory=dict)


@dataclass(frozen=True)
class FeatureTarget:
    topic: str
    feature: str

    @property
    def identifier(self) -> str:
        return f"{self.topic}/{self.feature}"


@dataclass(frozen=True)
class Route:
    name: str
    target: FeatureTarget
    # When set, the measurement unit must match exactly.
    unit: str | None = None

    def matches(self, measurement: Measurement) -> bool:
        if measurement.name != self.name:
            return False
        return self.unit is None or measurement.unit == self.unit


class DispatchMap:
    def __init__(self, devices: Iterable[Device], routes: Iterable[Route]) -> None:
        self._devices = tuple(devices)
        by_name: dict[str, list[Route]] = {}
        for route in routes:
            by_name.setdefault(route.name, []).append(route)
        self._routes = MappingProxyType({k: tuple(v) for k, v in by_name.items()})

    @property
    def devices(self) -> tuple[Device, ...]:
        return self._devices

    def route(self, measurement: Measurement) -> FeatureTarget | None:
        for candidate in self._routes.get(measurement.name, ()):
            if candidate.matches(measurement):
                return candidate.target
        return None

    def dispatch(self, measurements: Iterable[Measurement], sink: Sink) -> int:
        published = 0
        for m in measurements:
            target = self.route(m)
            if target is None:
                continue
            sink.publish(target, m.value)
            published += 1
        logger.debug("Published %d measurement(s)", published)
        return published


def weather_station_map(device_name: str) -> DispatchMap:
    """The devices and routes for the Uppsala observation page."""

    temperature = Device(
        topic=f"sensor/temperature/{device_name}",
        name=f"{device_name} Temperature",
        type="temperatureSensor",
        features={"currentTemperature": FeatureInfo()},
    )
    humidity = Device(
        topic=f"sensor/humidity/{device_name}",
        name=f"{device_name} Relative Humidity",
        type="humiditySensor",
        features={"currentRelativeHumidity": FeatureInfo()},
    )
    weather = Device(
        topic=f"sensor/weather/{device_name}",
        name=f"{device_name} Weather",
        type="weatherStation",
        features={
            "precipitation": FeatureInfo(),
            "airPressure": FeatureInfo(),
            "globalRadiation": FeatureInfo(),
            "windSpeed": FeatureInfo(),
            "windDirection": FeatureInfo(min=0, max=360, step=1),
        },
    )

    def to(device: Device, feature: str) -> FeatureTarget:
        return FeatureTarget(topic=device.topic, feature=feature)

    routes = [
        Route("temperature", to(temperature, "currentTemperature")),
        Route("air humidity", to(humidity, "currentRelativeHumidity")),
        Route(
            "precipitation last hour",
            to(weather, "precipitation"),
            unit="mm (disdrometer)",
        ),
        Route("wind speed", to(weather, "windSpeed")),
        Route("wind direction", to(weather, "windDirection")),
        Route("air pressure", to(weather, "airPressure")),
        Route("global radiation", to(weather, "globalRadiation")),
    ]
    return DispatchMap([temperature, humidity, weather], routes)
