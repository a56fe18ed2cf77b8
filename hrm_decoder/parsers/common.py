"""Decoding helpers shared by the SRD format variants.

Each variant module composes these helpers into its own Header, Zones, Laps
and Samples phases; the helpers only know about one record at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..config import LABEL_LENGTH, RECORDING_INTERVALS, YEAR_BASE, ZONE_COUNT
from ..errors import MalformedRecordError
from ..io.cursor import BinaryCursor
from ..io.units import UnitConverter, UnitSystem
from ..models.types import (
    ExerciseAltitude,
    ExerciseCadence,
    ExerciseFileType,
    ExercisePower,
    ExerciseSpeed,
    ExerciseTemperature,
    HeartRateLimit,
    Lap,
    LapAltitude,
    LapSpeed,
    LapTemperature,
    RecordingMode,
    Sample,
)


_POLAR_SYMBOLS = "-%/()*+.:?"


@dataclass
class ParsedHeader:
    file_type: ExerciseFileType
    device_name: str
    date_time: datetime
    exercise_type: str
    duration: int
    recording_interval: int
    heart_rate_avg: int
    heart_rate_max: int
    recording_mode: RecordingMode
    units: UnitSystem = UnitSystem.METRIC
    energy: int = 0
    energy_total: int = 0
    sum_exercise_time: int = 0
    sum_ride_time: int = 0
    odometer: int = 0
    speed: Optional[ExerciseSpeed] = None
    cadence: Optional[ExerciseCadence] = None
    altitude: Optional[ExerciseAltitude] = None
    temperature: Optional[ExerciseTemperature] = None
    power: Optional[ExercisePower] = None

    @property
    def converter(self) -> UnitConverter:
        return UnitConverter(self.units)


@dataclass
class ParsedSections:
    """Everything a variant decoded, before the model invariants are checked."""
    header: ParsedHeader
    heart_rate_limits: List[HeartRateLimit] = field(default_factory=list)
    laps: List[Lap] = field(default_factory=list)
    samples: List[Sample] = field(default_factory=list)


@dataclass(frozen=True)
class FormatVariant:
    """One file-format family and the functions decoding its phases."""
    signature: int
    file_type: ExerciseFileType
    device_name: str
    read_header: Callable[[BinaryCursor], ParsedHeader]
    read_zones: Callable[[BinaryCursor, ParsedHeader], List[HeartRateLimit]]
    read_laps: Callable[[BinaryCursor, ParsedHeader], List[Lap]]
    read_samples: Callable[[BinaryCursor, ParsedHeader], List[Sample]]


def decode_label(raw: bytes) -> str:
    """Decode text stored in the Polar watch character set."""
    chars = []
    for code in raw:
        if code <= 9:
            chars.append(chr(ord("0") + code))
        elif code == 10:
            chars.append(" ")
        elif code <= 36:
            chars.append(chr(ord("A") + code - 11))
        elif code <= 62:
            chars.append(chr(ord("a") + code - 37))
        elif code - 63 < len(_POLAR_SYMBOLS):
            chars.append(_POLAR_SYMBOLS[code - 63])
        else:
            chars.append("_")
    return "".join(chars)


def read_preamble(cursor: BinaryCursor) -> int:
    """Read the file size and signature; returns the signature byte."""
    size = cursor.read_u16()
    if size != cursor.size:
        raise MalformedRecordError(f"file size field says {size} bytes, file has {cursor.size}", offset=0)
    return cursor.read_u8()


def read_label(cursor: BinaryCursor) -> str:
    return decode_label(cursor.read_bytes(LABEL_LENGTH))


def read_date_time(cursor: BinaryCursor) -> datetime:
    start = cursor.offset
    second = cursor.read_bcd()
    minute = cursor.read_bcd()
    hour = cursor.read_bcd()
    day = cursor.read_bcd()
    month = cursor.read_bcd()
    year = YEAR_BASE + cursor.read_bcd()
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        raise MalformedRecordError(f"invalid exercise date-time ({e})", offset=start) from e


def read_clock(cursor: BinaryCursor) -> int:
    """Read BCD hours, minutes, seconds; returns seconds."""
    hours = cursor.read_bcd()
    minutes = cursor.read_bcd()
    seconds = cursor.read_bcd()
    return (hours * 60 + minutes) * 60 + seconds


def read_split(cursor: BinaryCursor) -> int:
    """Read a clock followed by a tenths byte; returns tenths of a second."""
    seconds = read_clock(cursor)
    tenths_offset = cursor.offset
    tenths = cursor.read_u8()
    if tenths > 9:
        raise MalformedRecordError(f"tenths of second out of range: {tenths}", offset=tenths_offset)
    return seconds * 10 + tenths


def read_hours_minutes(cursor: BinaryCursor) -> int:
    """Read BCD minutes followed by two BCD bytes of hours; returns minutes."""
    minutes = cursor.read_bcd()
    hours = cursor.read_bcd_number(2)
    return hours * 60 + minutes


def read_recording_interval(cursor: BinaryCursor, allowed_codes: Tuple[int, ...]) -> int:
    start = cursor.offset
    code = cursor.read_u8()
    if code not in allowed_codes:
        raise MalformedRecordError(f"unknown recording interval code {code}", offset=start)
    return RECORDING_INTERVALS[code]


def read_units(cursor: BinaryCursor) -> UnitSystem:
    return UnitSystem.from_flag(cursor.read_flags().is_set(0))


def read_energy(cursor: BinaryCursor) -> Tuple[int, int]:
    """Read energy and cumulative energy (kcal)."""
    return cursor.read_bcd_number(3), cursor.read_bcd_number(3)


def read_altitude_summary(cursor: BinaryCursor, converter: UnitConverter) -> Tuple[ExerciseAltitude, ExerciseTemperature]:
    altitude = ExerciseAltitude(
        altitude_min=converter.altitude(cursor.read_i16()),
        altitude_avg=converter.altitude(cursor.read_i16()),
        altitude_max=converter.altitude(cursor.read_i16()),
    )
    temperature = ExerciseTemperature(
        temperature_min=converter.temperature(cursor.read_i8()),
        temperature_avg=converter.temperature(cursor.read_i8()),
        temperature_max=converter.temperature(cursor.read_i8()),
    )
    return altitude, temperature


def read_speed_summary(cursor: BinaryCursor, converter: UnitConverter) -> ExerciseSpeed:
    return ExerciseSpeed(
        speed_avg=converter.speed(cursor.read_u16()),
        speed_max=converter.speed(cursor.read_u16()),
        distance=converter.distance(cursor.read_u16()),
    )


def read_cadence_summary(cursor: BinaryCursor) -> ExerciseCadence:
    return ExerciseCadence(cadence_avg=cursor.read_u8(), cadence_max=cursor.read_u8())


def read_power_summary(cursor: BinaryCursor) -> ExercisePower:
    return ExercisePower(power_avg=cursor.read_u16(), power_max=cursor.read_u16())


def read_heart_rate_limits(cursor: BinaryCursor, absolute: bool) -> List[HeartRateLimit]:
    """Read the three zone bound pairs followed by their three time triples."""
    bounds = [(cursor.read_u8(), cursor.read_u8()) for _ in range(ZONE_COUNT)]
    limits: List[HeartRateLimit] = []
    for lower, upper in bounds:
        limits.append(
            HeartRateLimit(
                lower_heart_rate=lower,
                upper_heart_rate=upper,
                is_absolute_range=absolute,
                time_below=read_clock(cursor),
                time_within=read_clock(cursor),
                time_above=read_clock(cursor),
            )
        )
    return limits


def read_lap(cursor: BinaryCursor, mode: RecordingMode, converter: UnitConverter) -> Lap:
    time_split = read_split(cursor)
    heart_rate_split = cursor.read_u8()
    heart_rate_avg = cursor.read_u8()
    heart_rate_max = cursor.read_u8()

    altitude = temperature = None
    if mode.altitude:
        altitude = LapAltitude(
            altitude=converter.altitude(cursor.read_i16()),
            ascent=converter.altitude(cursor.read_u16()),
        )
        temperature = LapTemperature(temperature=converter.temperature(cursor.read_i8()))

    speed = None
    if mode.speed:
        speed_end = converter.speed(cursor.read_u16())
        speed_avg = converter.speed(cursor.read_u16())
        distance = converter.distance(cursor.read_u16())
        cadence = cursor.read_u8() if mode.cadence else None
        speed = LapSpeed(speed_end=speed_end, speed_avg=speed_avg, distance=distance, cadence=cadence)

    power = cursor.read_u16() if mode.power else None

    return Lap(
        time_split=time_split,
        heart_rate_split=heart_rate_split,
        heart_rate_avg=heart_rate_avg,
        heart_rate_max=heart_rate_max,
        speed=speed,
        altitude=altitude,
        temperature=temperature,
        power=power,
    )


def sample_count(duration: int, recording_interval: int) -> int:
    """Number of samples recorded for ``duration`` tenths of a second."""
    return duration // (recording_interval * 10) + 1


def read_sample_values(cursor: BinaryCursor, mode: RecordingMode, converter: UnitConverter) -> Dict[str, Optional[float]]:
    values: Dict[str, Optional[float]] = {"heart_rate": cursor.read_u8()}
    if mode.altitude:
        values["altitude"] = converter.altitude(cursor.read_i16())
    if mode.speed:
        values["speed"] = converter.speed(cursor.read_u16())
    if mode.cadence:
        values["cadence"] = cursor.read_u8()
    if mode.power:
        values["power"] = cursor.read_u16()
    return values


def cumulative_distances(speeds: List[float], recording_interval: int, total_distance: Optional[int] = None) -> List[int]:
    """Integrate km/h speeds into meters covered before each sample.

    With ``total_distance`` the integral is scaled so the last sample lands
    on the distance the device recorded for the whole exercise.
    """
    if not speeds:
        return []
    steps = np.asarray(speeds, dtype=float) / 3.6 * recording_interval
    totals = np.concatenate(([0.0], np.cumsum(steps[:-1])))
    if total_distance is not None and totals[-1] > 0:
        totals = totals * (total_distance / totals[-1])
        totals[-1] = total_distance
    return [int(round(float(total))) for total in totals]


def assemble_samples(rows: List[Dict[str, Optional[float]]], header: ParsedHeader) -> List[Sample]:
    """Turn decoded sample values (oldest first) into timestamped samples."""
    mode = header.recording_mode
    recording_interval = header.recording_interval
    distances: List[Optional[int]] = [None] * len(rows)
    if mode.speed:
        total_distance = header.speed.distance if header.speed is not None else None
        distances = cumulative_distances([row["speed"] for row in rows], recording_interval, total_distance)

    samples: List[Sample] = []
    for index, row in enumerate(rows):
        samples.append(
            Sample(
                timestamp=index * recording_interval * 1000,
                heart_rate=int(row["heart_rate"]),
                altitude=row.get("altitude"),
                speed=row.get("speed"),
                cadence=row.get("cadence"),
                distance=distances[index],
                power=row.get("power"),
            )
        )
    return samples
