"""Low level decoding: byte cursor, unit conversion and format dispatch."""

from .cursor import BinaryCursor, FlagByte
from .units import UnitConverter, UnitSystem

__all__ = ["BinaryCursor", "FlagByte", "UnitConverter", "UnitSystem"]
