"""Later S7xx raw format (S710/S720i/S725).

Adds the unit marker, the recording mode bitmask with bike number, sensor
summaries, ride time and odometer. Samples are stored newest first.
"""

from __future__ import annotations

import logging
from typing import List

from ..config import DEVICE_NAME_S6XX_S7XX, SIGNATURE_S710
from ..errors import MalformedRecordError
from ..io.cursor import BinaryCursor
from ..models.types import ExerciseFileType, HeartRateLimit, Lap, RecordingMode, Sample
from .common import (
    FormatVariant,
    ParsedHeader,
    assemble_samples,
    read_altitude_summary,
    read_cadence_summary,
    read_date_time,
    read_energy,
    read_heart_rate_limits,
    read_hours_minutes,
    read_label,
    read_lap,
    read_power_summary,
    read_preamble,
    read_recording_interval,
    read_sample_values,
    read_speed_summary,
    read_split,
    read_units,
    sample_count,
)

logger = logging.getLogger(__name__)

_INTERVAL_CODES = (0, 1, 2)
_BIKE_NUMBERS = (1, 2)


def read_recording_mode(cursor: BinaryCursor) -> RecordingMode:
    start = cursor.offset
    flags = cursor.read_flags()
    altitude = flags.is_set(0)
    speed = flags.is_set(1)
    cadence = flags.is_set(2)
    power = flags.is_set(3)

    if cadence and not speed:
        raise MalformedRecordError("cadence recorded without speed", offset=start)

    bike_number = None
    if speed:
        bike_number = flags.field(4, 2)
        if bike_number not in _BIKE_NUMBERS:
            raise MalformedRecordError(f"invalid bike number {bike_number}", offset=start)

    return RecordingMode(altitude=altitude, speed=speed, cadence=cadence, power=power, bike_number=bike_number)


def read_header(cursor: BinaryCursor) -> ParsedHeader:
    read_preamble(cursor)
    exercise_type = read_label(cursor)
    date_time = read_date_time(cursor)
    duration = read_split(cursor)
    heart_rate_avg = cursor.read_u8()
    heart_rate_max = cursor.read_u8()
    recording_interval = read_recording_interval(cursor, _INTERVAL_CODES)
    units = read_units(cursor)
    mode = read_recording_mode(cursor)

    header = ParsedHeader(
        file_type=ExerciseFileType.S710RAW,
        device_name=DEVICE_NAME_S6XX_S7XX,
        date_time=date_time,
        exercise_type=exercise_type,
        duration=duration,
        recording_interval=recording_interval,
        heart_rate_avg=heart_rate_avg,
        heart_rate_max=heart_rate_max,
        recording_mode=mode,
        units=units,
    )
    converter = header.converter

    if mode.altitude:
        header.altitude, header.temperature = read_altitude_summary(cursor, converter)
    if mode.speed:
        header.speed = read_speed_summary(cursor, converter)
    if mode.cadence:
        header.cadence = read_cadence_summary(cursor)
    if mode.power:
        header.power = read_power_summary(cursor)

    header.energy, header.energy_total = read_energy(cursor)
    header.sum_exercise_time = read_hours_minutes(cursor)
    header.sum_ride_time = read_hours_minutes(cursor)
    header.odometer = converter.odometer(cursor.read_bcd_number(3))
    return header


def read_zones(cursor: BinaryCursor, header: ParsedHeader) -> List[HeartRateLimit]:
    return read_heart_rate_limits(cursor, absolute=True)


def read_laps(cursor: BinaryCursor, header: ParsedHeader) -> List[Lap]:
    count = cursor.read_u8()
    converter = header.converter
    return [read_lap(cursor, header.recording_mode, converter) for _ in range(count)]


def read_samples(cursor: BinaryCursor, header: ParsedHeader) -> List[Sample]:
    count = sample_count(header.duration, header.recording_interval)
    logger.debug(f"Reading {count} samples at {header.recording_interval}s ({header.units.value} units)")
    converter = header.converter
    rows = [read_sample_values(cursor, header.recording_mode, converter) for _ in range(count)]
    rows.reverse()
    return assemble_samples(rows, header)


VARIANT = FormatVariant(
    signature=SIGNATURE_S710,
    file_type=ExerciseFileType.S710RAW,
    device_name=DEVICE_NAME_S6XX_S7XX,
    read_header=read_header,
    read_zones=read_zones,
    read_laps=read_laps,
    read_samples=read_samples,
)
