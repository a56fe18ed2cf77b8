"""Assembly of the immutable ``Exercise`` from decoded sections.

The builder is the last gate before an exercise reaches the caller: even a
file with a valid checksum is rejected when its sections contradict each
other, e.g. a lap carrying speed data while the recording mode has no speed.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import ZONE_COUNT
from ..errors import CorruptFileError
from ..parsers.common import ParsedHeader, ParsedSections, sample_count
from .types import Exercise, Lap, RecordingMode, Sample

logger = logging.getLogger(__name__)


def _check_presence(value: Optional[object], expected: bool, field: str, index: Optional[int] = None) -> None:
    if (value is not None) != expected:
        state = "missing" if expected else "present although not recorded"
        raise CorruptFileError(f"optional value {state}", field=field, index=index)


def _check_recording_mode(mode: RecordingMode) -> None:
    if mode.bike_number is not None and not mode.speed:
        raise CorruptFileError("bike number without speed recording", field="recording_mode.bike_number")
    if mode.cadence and not mode.speed:
        raise CorruptFileError("cadence recording requires speed recording", field="recording_mode.cadence")


def _check_summaries(header: ParsedHeader) -> None:
    mode = header.recording_mode
    _check_presence(header.speed, mode.speed, "speed")
    _check_presence(header.cadence, mode.cadence, "cadence")
    _check_presence(header.altitude, mode.altitude, "altitude")
    _check_presence(header.temperature, mode.altitude, "temperature")
    _check_presence(header.power, mode.power, "power")


def _check_lap(lap: Lap, index: int, mode: RecordingMode) -> None:
    _check_presence(lap.speed, mode.speed, "lap.speed", index)
    if lap.speed is not None:
        _check_presence(lap.speed.cadence, mode.cadence, "lap.speed.cadence", index)
    _check_presence(lap.altitude, mode.altitude, "lap.altitude", index)
    _check_presence(lap.temperature, mode.altitude, "lap.temperature", index)
    _check_presence(lap.power, mode.power, "lap.power", index)


def _check_sample(sample: Sample, index: int, mode: RecordingMode, recording_interval: int) -> None:
    expected_timestamp = index * recording_interval * 1000
    if sample.timestamp != expected_timestamp:
        raise CorruptFileError(
            f"timestamp {sample.timestamp} ms, expected {expected_timestamp} ms",
            field="sample.timestamp",
            index=index,
        )
    _check_presence(sample.altitude, mode.altitude, "sample.altitude", index)
    _check_presence(sample.speed, mode.speed, "sample.speed", index)
    _check_presence(sample.distance, mode.speed, "sample.distance", index)
    _check_presence(sample.cadence, mode.cadence, "sample.cadence", index)
    _check_presence(sample.power, mode.power, "sample.power", index)


def validate_sections(sections: ParsedSections) -> None:
    """Raise ``CorruptFileError`` when the sections break a model invariant."""
    header = sections.header
    mode = header.recording_mode

    if header.recording_interval <= 0:
        raise CorruptFileError(f"recording interval must be positive, got {header.recording_interval}", field="recording_interval")
    _check_recording_mode(mode)
    _check_summaries(header)

    if len(sections.heart_rate_limits) != ZONE_COUNT:
        raise CorruptFileError(
            f"expected {ZONE_COUNT} heart rate limits, got {len(sections.heart_rate_limits)}",
            field="heart_rate_limits",
        )

    previous_split = 0
    for index, lap in enumerate(sections.laps):
        if lap.time_split < previous_split:
            raise CorruptFileError("lap split earlier than the previous one", field="lap.time_split", index=index)
        previous_split = lap.time_split
        _check_lap(lap, index, mode)

    expected_samples = sample_count(header.duration, header.recording_interval)
    if len(sections.samples) != expected_samples:
        raise CorruptFileError(
            f"expected {expected_samples} samples for the exercise duration, got {len(sections.samples)}",
            field="samples",
        )
    for index, sample in enumerate(sections.samples):
        _check_sample(sample, index, mode, header.recording_interval)


def build_exercise(sections: ParsedSections) -> Exercise:
    """Validate ``sections`` and return the immutable exercise."""
    validate_sections(sections)
    header = sections.header
    exercise = Exercise(
        file_type=header.file_type,
        device_name=header.device_name,
        date_time=header.date_time,
        exercise_type=header.exercise_type,
        duration=header.duration,
        recording_interval=header.recording_interval,
        heart_rate_avg=header.heart_rate_avg,
        heart_rate_max=header.heart_rate_max,
        energy=header.energy,
        energy_total=header.energy_total,
        sum_exercise_time=header.sum_exercise_time,
        sum_ride_time=header.sum_ride_time,
        odometer=header.odometer,
        recording_mode=header.recording_mode,
        heart_rate_limits=tuple(sections.heart_rate_limits),
        laps=tuple(sections.laps),
        samples=tuple(sections.samples),
        speed=header.speed,
        cadence=header.cadence,
        altitude=header.altitude,
        temperature=header.temperature,
        power=header.power,
    )
    logger.debug(f"Built {exercise.file_type.value} exercise with {len(exercise.laps)} laps and {len(exercise.samples)} samples")
    return exercise
