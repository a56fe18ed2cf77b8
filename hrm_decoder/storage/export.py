from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import pandas as pd

from ..config import get_config
from ..models.types import Exercise

logger = logging.getLogger(__name__)


_SAMPLE_INT_COLUMNS = ["heart_rate", "altitude", "cadence", "distance", "power"]
_LAP_FLOAT_COLUMNS = ["speed_end", "speed_avg"]


def _drop_empty_columns(df: pd.DataFrame, keep: List[str]) -> pd.DataFrame:
    """Drop optional columns that were not recorded (all values None)."""
    empty = [col for col in df.columns if col not in keep and df[col].isna().all()]
    return df.drop(columns=empty)


def samples_to_dataframe(exercise: Exercise) -> pd.DataFrame:
    """One row per sample; optional columns only when recorded.

    Columns: timestamp_ms, heart_rate (bpm), altitude (m), speed (km/h), cadence (rpm), distance (m), power (W)
    """
    columns = ["timestamp_ms", "heart_rate", "altitude", "speed", "cadence", "distance", "power"]
    rows = [
        {
            "timestamp_ms": s.timestamp,
            "heart_rate": s.heart_rate,
            "altitude": s.altitude,
            "speed": s.speed,
            "cadence": s.cadence,
            "distance": s.distance,
            "power": s.power,
        }
        for s in exercise.samples
    ]
    df = pd.DataFrame(rows, columns=columns)
    df = df.astype({col: "Int64" for col in _SAMPLE_INT_COLUMNS})
    return _drop_empty_columns(df, keep=["timestamp_ms", "heart_rate"])


def laps_to_dataframe(exercise: Exercise) -> pd.DataFrame:
    """One row per lap with its flattened sub-records."""
    columns = [
        "lap",
        "time_split",
        "heart_rate_split",
        "heart_rate_avg",
        "heart_rate_max",
        "speed_end",
        "speed_avg",
        "distance",
        "cadence",
        "altitude",
        "ascent",
        "temperature",
        "power",
    ]
    rows: List[Dict[str, Any]] = []
    for idx, lap in enumerate(exercise.laps, start=1):
        rows.append(
            {
                "lap": idx,
                "time_split": lap.time_split,
                "heart_rate_split": lap.heart_rate_split,
                "heart_rate_avg": lap.heart_rate_avg,
                "heart_rate_max": lap.heart_rate_max,
                "speed_end": lap.speed.speed_end if lap.speed else None,
                "speed_avg": lap.speed.speed_avg if lap.speed else None,
                "distance": lap.speed.distance if lap.speed else None,
                "cadence": lap.speed.cadence if lap.speed else None,
                "altitude": lap.altitude.altitude if lap.altitude else None,
                "ascent": lap.altitude.ascent if lap.altitude else None,
                "temperature": lap.temperature.temperature if lap.temperature else None,
                "power": lap.power,
            }
        )
    df = pd.DataFrame(rows, columns=columns)
    # optional values stay integers next to the missing ones
    df = df.astype({col: "Int64" for col in columns if col not in _LAP_FLOAT_COLUMNS})
    return _drop_empty_columns(df, keep=columns[:5])


def heart_rate_limits_to_dataframe(exercise: Exercise) -> pd.DataFrame:
    df = pd.DataFrame([asdict(limit) for limit in exercise.heart_rate_limits])
    df.insert(0, "zone", range(1, len(df) + 1))
    return df


def exercise_summary(exercise: Exercise) -> Dict[str, Any]:
    """Exercise header values as plain types, ready for json.dumps."""
    summary: Dict[str, Any] = {
        "file_type": exercise.file_type.value,
        "device_name": exercise.device_name,
        "date_time": exercise.date_time.isoformat(),
        "exercise_type": exercise.exercise_type,
        "duration_s": exercise.duration_seconds,
        "recording_interval_s": exercise.recording_interval,
        "heart_rate_avg": exercise.heart_rate_avg,
        "heart_rate_max": exercise.heart_rate_max,
        "energy_kcal": exercise.energy,
        "energy_total_kcal": exercise.energy_total,
        "sum_exercise_time_min": exercise.sum_exercise_time,
        "sum_ride_time_min": exercise.sum_ride_time,
        "odometer_km": exercise.odometer,
        "recording_mode": asdict(exercise.recording_mode),
        "heart_rate_limits": [asdict(limit) for limit in exercise.heart_rate_limits],
        "lap_count": len(exercise.laps),
        "sample_count": len(exercise.samples),
    }
    for name in ("speed", "cadence", "altitude", "temperature", "power"):
        value = getattr(exercise, name)
        summary[name] = asdict(value) if value is not None else None
    return summary


def export_samples_csv(exercise: Exercise, path: str, float_format: Optional[str] = None) -> None:
    df = samples_to_dataframe(exercise)
    df.to_csv(path, index=False, float_format=float_format or get_config().csv_float_format)
    logger.info(f"Wrote {len(df)} samples to {path}")


def export_laps_csv(exercise: Exercise, path: str, float_format: Optional[str] = None) -> None:
    df = laps_to_dataframe(exercise)
    df.to_csv(path, index=False, float_format=float_format or get_config().csv_float_format)
    logger.info(f"Wrote {len(df)} laps to {path}")
