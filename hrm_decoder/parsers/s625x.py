"""S625X raw format with percentual heart rate zones.

Zone bounds are stored as percent of the maximum heart rate. The laps are
terminated by a sentinel byte instead of a count; only the altitude and
speed (foot pod) sensors are supported.
"""

from __future__ import annotations

import logging
from typing import List

from ..config import DEVICE_NAME_S6XX_S7XX, LAP_SENTINEL, SIGNATURE_S625X
from ..io.cursor import BinaryCursor
from ..models.types import ExerciseFileType, HeartRateLimit, Lap, RecordingMode, Sample
from .common import (
    FormatVariant,
    ParsedHeader,
    assemble_samples,
    read_altitude_summary,
    read_date_time,
    read_energy,
    read_heart_rate_limits,
    read_hours_minutes,
    read_label,
    read_lap,
    read_preamble,
    read_recording_interval,
    read_sample_values,
    read_speed_summary,
    read_split,
    read_units,
    sample_count,
)

logger = logging.getLogger(__name__)

_INTERVAL_CODES = (0, 1, 2, 3)


def read_header(cursor: BinaryCursor) -> ParsedHeader:
    read_preamble(cursor)
    exercise_type = read_label(cursor)
    date_time = read_date_time(cursor)
    duration = read_split(cursor)
    heart_rate_avg = cursor.read_u8()
    heart_rate_max = cursor.read_u8()
    recording_interval = read_recording_interval(cursor, _INTERVAL_CODES)
    units = read_units(cursor)
    flags = cursor.read_flags()
    # bits above altitude/speed are unused by this device
    mode = RecordingMode(altitude=flags.is_set(0), speed=flags.is_set(1))

    header = ParsedHeader(
        file_type=ExerciseFileType.S625XRAW,
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

    header.energy, header.energy_total = read_energy(cursor)
    header.sum_exercise_time = read_hours_minutes(cursor)
    return header


def read_zones(cursor: BinaryCursor, header: ParsedHeader) -> List[HeartRateLimit]:
    return read_heart_rate_limits(cursor, absolute=False)


def read_laps(cursor: BinaryCursor, header: ParsedHeader) -> List[Lap]:
    converter = header.converter
    laps: List[Lap] = []
    while cursor.peek_u8() != LAP_SENTINEL:
        laps.append(read_lap(cursor, header.recording_mode, converter))
    cursor.skip(1)
    logger.debug(f"Read {len(laps)} sentinel-terminated laps")
    return laps


def read_samples(cursor: BinaryCursor, header: ParsedHeader) -> List[Sample]:
    count = sample_count(header.duration, header.recording_interval)
    converter = header.converter
    rows = [read_sample_values(cursor, header.recording_mode, converter) for _ in range(count)]
    return assemble_samples(rows, header)


VARIANT = FormatVariant(
    signature=SIGNATURE_S625X,
    file_type=ExerciseFileType.S625XRAW,
    device_name=DEVICE_NAME_S6XX_S7XX,
    read_header=read_header,
    read_zones=read_zones,
    read_laps=read_laps,
    read_samples=read_samples,
)
