"""Conversion of raw device readings into metric values."""

from __future__ import annotations

from enum import Enum

from ..config import DISTANCE_RESOLUTION, KM_PER_MILE, METERS_PER_FOOT, SPEED_RESOLUTION


class UnitSystem(Enum):
    METRIC = "metric"
    ENGLISH = "english"

    @classmethod
    def from_flag(cls, english: bool) -> "UnitSystem":
        return cls.ENGLISH if english else cls.METRIC


class UnitConverter:
    """Normalizes raw readings recorded in ``units`` to metric.

    Canonical units: speed km/h, distance m, altitude m, temperature °C,
    odometer km. All methods are pure.
    """

    def __init__(self, units: UnitSystem = UnitSystem.METRIC):
        self.units = units

    @property
    def is_english(self) -> bool:
        return self.units is UnitSystem.ENGLISH

    def speed(self, raw: int) -> float:
        """Raw speed in 1/16 km/h (or mph) to km/h."""
        value = raw / SPEED_RESOLUTION
        return value * KM_PER_MILE if self.is_english else value

    def distance(self, raw: int) -> int:
        """Raw distance in 1/10 km (or mile) to meters."""
        if self.is_english:
            return int(round(raw / DISTANCE_RESOLUTION * KM_PER_MILE * 1000))
        return raw * (1000 // DISTANCE_RESOLUTION)

    def altitude(self, raw: int) -> int:
        """Altitude or ascent in m (or ft) to meters."""
        if self.is_english:
            return int(round(raw * METERS_PER_FOOT))
        return raw

    def temperature(self, raw: int) -> int:
        """Temperature in °C (or °F) to °C."""
        if self.is_english:
            return int(round((raw - 32) * 5 / 9))
        return raw

    def odometer(self, raw: int) -> int:
        """Odometer in km (or miles) to km."""
        if self.is_english:
            return int(round(raw * KM_PER_MILE))
        return raw
