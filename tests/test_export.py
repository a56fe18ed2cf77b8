import json

import pandas as pd

from hrm_decoder import parse_exercise
from hrm_decoder.storage.export import (
    exercise_summary,
    export_laps_csv,
    export_samples_csv,
    heart_rate_limits_to_dataframe,
    laps_to_dataframe,
    samples_to_dataframe,
)


def test_samples_dataframe_keeps_recorded_columns(s610_file, s710_metric_file):
    df = samples_to_dataframe(parse_exercise(s610_file))
    assert list(df.columns) == ["timestamp_ms", "heart_rate"]
    assert len(df) == 1163

    df = samples_to_dataframe(parse_exercise(s710_metric_file))
    assert list(df.columns) == ["timestamp_ms", "heart_rate", "altitude", "speed", "distance"]
    assert df["distance"].iloc[100] == 10132
    assert df["timestamp_ms"].iloc[-1] == 294 * 15000


def test_laps_dataframe(s710_nospeed_file):
    df = laps_to_dataframe(parse_exercise(s710_nospeed_file))
    assert list(df["lap"]) == [1, 2, 3]
    assert "speed_avg" not in df.columns
    assert list(df["altitude"]) == [174, 200, 281]
    assert list(df["temperature"]) == [17, 19, 21]


def test_heart_rate_limits_dataframe(s625x_file):
    df = heart_rate_limits_to_dataframe(parse_exercise(s625x_file))
    assert list(df["zone"]) == [1, 2, 3]
    assert list(df["lower_heart_rate"]) == [70, 80, 90]
    assert not df["is_absolute_range"].any()


def test_summary_is_json_serializable(s710_metric_file):
    summary = exercise_summary(parse_exercise(s710_metric_file))
    decoded = json.loads(json.dumps(summary))
    assert decoded["file_type"] == "S710RAW"
    assert decoded["date_time"] == "2002-11-20T14:07:44"
    assert decoded["recording_mode"]["bike_number"] == 2
    assert decoded["speed"]["distance"] == 29900
    assert decoded["cadence"] is None
    assert decoded["lap_count"] == 5
    assert decoded["sample_count"] == 295


def test_csv_export(tmp_path, s710_metric_file):
    exercise = parse_exercise(s710_metric_file)
    samples_path = tmp_path / "samples.csv"
    laps_path = tmp_path / "laps.csv"
    export_samples_csv(exercise, str(samples_path))
    export_laps_csv(exercise, str(laps_path), float_format="%.1f")

    samples = pd.read_csv(samples_path)
    assert len(samples) == 295
    assert samples["heart_rate"].iloc[0] == 101

    laps = pd.read_csv(laps_path)
    assert len(laps) == 5
    assert laps["speed_avg"].iloc[0] == 25.8


def test_integer_columns_stay_integers(tmp_path, s710_metric_file, s710_nospeed_file):
    df = samples_to_dataframe(parse_exercise(s710_metric_file))
    assert df["altitude"].dtype == "Int64"
    assert df["distance"].dtype == "Int64"
    assert df["speed"].dtype == "float64"

    laps = laps_to_dataframe(parse_exercise(s710_nospeed_file))
    assert laps["temperature"].dtype == "Int64"

    path = tmp_path / "samples.csv"
    export_samples_csv(parse_exercise(s710_metric_file), str(path), float_format="%.2f")
    header, first = path.read_text().splitlines()[:2]
    assert header == "timestamp_ms,heart_rate,altitude,speed,distance"
    assert first == "0,101,240,4.19,0"
