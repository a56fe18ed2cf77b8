"""Early S6xx raw format (S610/S610i).

Heart rate only: no sensors, no unit marker, absolute zones, count-prefixed
laps and samples stored oldest first.
"""

from __future__ import annotations

import logging
from typing import List

from ..config import DEVICE_NAME_S6XX_S7XX, SIGNATURE_S610
from ..io.cursor import BinaryCursor
from ..models.types import ExerciseFileType, HeartRateLimit, Lap, RecordingMode, Sample
from .common import (
    FormatVariant,
    ParsedHeader,
    assemble_samples,
    read_date_time,
    read_energy,
    read_heart_rate_limits,
    read_hours_minutes,
    read_label,
    read_lap,
    read_preamble,
    read_recording_interval,
    read_sample_values,
    read_split,
    sample_count,
)

logger = logging.getLogger(__name__)

_INTERVAL_CODES = (0, 1, 2)


def read_header(cursor: BinaryCursor) -> ParsedHeader:
    read_preamble(cursor)
    exercise_type = read_label(cursor)
    date_time = read_date_time(cursor)
    duration = read_split(cursor)
    heart_rate_avg = cursor.read_u8()
    heart_rate_max = cursor.read_u8()
    recording_interval = read_recording_interval(cursor, _INTERVAL_CODES)
    energy, energy_total = read_energy(cursor)
    sum_exercise_time = read_hours_minutes(cursor)

    return ParsedHeader(
        file_type=ExerciseFileType.S610RAW,
        device_name=DEVICE_NAME_S6XX_S7XX,
        date_time=date_time,
        exercise_type=exercise_type,
        duration=duration,
        recording_interval=recording_interval,
        heart_rate_avg=heart_rate_avg,
        heart_rate_max=heart_rate_max,
        recording_mode=RecordingMode(),
        energy=energy,
        energy_total=energy_total,
        sum_exercise_time=sum_exercise_time,
    )


def read_zones(cursor: BinaryCursor, header: ParsedHeader) -> List[HeartRateLimit]:
    return read_heart_rate_limits(cursor, absolute=True)


def read_laps(cursor: BinaryCursor, header: ParsedHeader) -> List[Lap]:
    count = cursor.read_u8()
    converter = header.converter
    return [read_lap(cursor, header.recording_mode, converter) for _ in range(count)]


def read_samples(cursor: BinaryCursor, header: ParsedHeader) -> List[Sample]:
    count = sample_count(header.duration, header.recording_interval)
    logger.debug(f"Reading {count} samples at {header.recording_interval}s")
    converter = header.converter
    rows = [read_sample_values(cursor, header.recording_mode, converter) for _ in range(count)]
    return assemble_samples(rows, header)


VARIANT = FormatVariant(
    signature=SIGNATURE_S610,
    file_type=ExerciseFileType.S610RAW,
    device_name=DEVICE_NAME_S6XX_S7XX,
    read_header=read_header,
    read_zones=read_zones,
    read_laps=read_laps,
    read_samples=read_samples,
)
