"""Typed exercise model."""

from .types import (
    Exercise,
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

__all__ = [
    "Exercise",
    "ExerciseAltitude",
    "ExerciseCadence",
    "ExerciseFileType",
    "ExercisePower",
    "ExerciseSpeed",
    "ExerciseTemperature",
    "HeartRateLimit",
    "Lap",
    "LapAltitude",
    "LapSpeed",
    "LapTemperature",
    "RecordingMode",
    "Sample",
]
