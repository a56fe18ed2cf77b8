"""Tabular views and export of decoded exercises."""

from .export import (
    exercise_summary,
    export_laps_csv,
    export_samples_csv,
    heart_rate_limits_to_dataframe,
    laps_to_dataframe,
    samples_to_dataframe,
)

__all__ = [
    "exercise_summary",
    "export_laps_csv",
    "export_samples_csv",
    "heart_rate_limits_to_dataframe",
    "laps_to_dataframe",
    "samples_to_dataframe",
]
