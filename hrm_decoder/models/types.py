from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ExerciseFileType(str, Enum):
    S610RAW = "S610RAW"
    S710RAW = "S710RAW"
    S625XRAW = "S625XRAW"


@dataclass(frozen=True)
class RecordingMode:
    altitude: bool = False
    speed: bool = False
    cadence: bool = False
    power: bool = False
    bike_number: Optional[int] = None  # only for cycling files with speed


@dataclass(frozen=True)
class HeartRateLimit:
    lower_heart_rate: int
    upper_heart_rate: int
    is_absolute_range: bool  # False: bounds are percent of max heart rate
    time_below: int  # seconds
    time_within: int
    time_above: int


@dataclass(frozen=True)
class LapSpeed:
    speed_end: float  # km/h
    speed_avg: float  # km/h
    distance: int  # m since exercise start
    cadence: Optional[int] = None  # rpm


@dataclass(frozen=True)
class LapAltitude:
    altitude: int  # m
    ascent: int  # m since exercise start


@dataclass(frozen=True)
class LapTemperature:
    temperature: int  # °C


@dataclass(frozen=True)
class Lap:
    time_split: int  # 1/10 s since exercise start
    heart_rate_split: int
    heart_rate_avg: int
    heart_rate_max: int
    speed: Optional[LapSpeed] = None
    altitude: Optional[LapAltitude] = None
    temperature: Optional[LapTemperature] = None
    power: Optional[int] = None  # W


@dataclass(frozen=True)
class Sample:
    timestamp: int  # ms since exercise start
    heart_rate: int
    altitude: Optional[int] = None  # m
    speed: Optional[float] = None  # km/h
    cadence: Optional[int] = None  # rpm
    distance: Optional[int] = None  # m since exercise start
    power: Optional[int] = None  # W


@dataclass(frozen=True)
class ExerciseSpeed:
    speed_avg: float
    speed_max: float
    distance: int


@dataclass(frozen=True)
class ExerciseCadence:
    cadence_avg: int
    cadence_max: int


@dataclass(frozen=True)
class ExerciseAltitude:
    altitude_min: int
    altitude_avg: int
    altitude_max: int


@dataclass(frozen=True)
class ExerciseTemperature:
    temperature_min: int
    temperature_avg: int
    temperature_max: int


@dataclass(frozen=True)
class ExercisePower:
    power_avg: int
    power_max: int


@dataclass(frozen=True)
class Exercise:
    """A decoded exercise. Created once per successful parse, never modified."""
    file_type: ExerciseFileType
    device_name: str
    date_time: datetime
    exercise_type: str
    duration: int  # 1/10 s
    recording_interval: int  # s
    heart_rate_avg: int
    heart_rate_max: int
    energy: int  # kcal
    energy_total: int  # kcal, cumulative over all exercises
    sum_exercise_time: int  # min, cumulative
    sum_ride_time: int  # min, cumulative
    odometer: int  # km
    recording_mode: RecordingMode
    heart_rate_limits: Tuple[HeartRateLimit, ...]
    laps: Tuple[Lap, ...]
    samples: Tuple[Sample, ...]
    speed: Optional[ExerciseSpeed] = None
    cadence: Optional[ExerciseCadence] = None
    altitude: Optional[ExerciseAltitude] = None
    temperature: Optional[ExerciseTemperature] = None
    power: Optional[ExercisePower] = None

    @property
    def duration_seconds(self) -> float:
        return self.duration / 10.0
