from concurrent.futures import ThreadPoolExecutor

import pytest

from hrm_decoder import (
    ChecksumMismatchError,
    MalformedRecordError,
    MissingFileError,
    ParseError,
    UnsupportedFormatError,
    parse_exercise,
)
from hrm_decoder.parsers.common import cumulative_distances

from srd_builder import (
    encode_srd,
    refresh,
    s610_recording,
    s710_cycling_metric_recording,
)

# label starts after size (2) and signature (1); date-time follows the 7 label bytes
DATE_OFFSET = 10


def test_missing_file(tmp_path):
    with pytest.raises(MissingFileError) as exc:
        parse_exercise(tmp_path / "missing.srd")
    assert exc.value.path.endswith("missing.srd")


def test_unsupported_extension(write_srd):
    with pytest.raises(UnsupportedFormatError):
        parse_exercise(write_srd(encode_srd(s610_recording()), "exercise.txt"))


def test_corrupted_checksum(write_srd):
    data = bytearray(encode_srd(s610_recording()))
    data[-1] ^= 0xFF
    with pytest.raises(ChecksumMismatchError) as exc:
        parse_exercise(write_srd(bytes(data)))
    assert exc.value.phase == "checksum"
    assert exc.value.expected != exc.value.actual


def test_corrupted_body_byte(write_srd):
    data = bytearray(encode_srd(s610_recording()))
    # a heart rate sample in the middle of the file
    data[len(data) // 2] ^= 0x01
    with pytest.raises(ChecksumMismatchError):
        parse_exercise(write_srd(bytes(data)))


def test_explicit_wrong_checksum(write_srd):
    rec = s610_recording()
    correct = encode_srd(rec)
    stored = int.from_bytes(correct[-2:], "little")
    with pytest.raises(ChecksumMismatchError) as exc:
        parse_exercise(write_srd(encode_srd(rec, checksum=(stored + 1) % 0x10000)))
    assert exc.value.actual == stored


def test_truncated_file(write_srd):
    data = encode_srd(s610_recording())
    truncated = bytearray(data[:-12])
    truncated[0:2] = len(truncated).to_bytes(2, "little")
    with pytest.raises(MalformedRecordError) as exc:
        parse_exercise(write_srd(bytes(truncated)))
    assert exc.value.phase == "samples"
    assert exc.value.offset == len(truncated)


def test_size_field_mismatch(write_srd):
    data = encode_srd(s610_recording())
    with pytest.raises(MalformedRecordError) as exc:
        parse_exercise(write_srd(data[:-1]))
    assert exc.value.offset == 0
    assert exc.value.phase == "header"


def test_trailing_bytes_before_checksum(write_srd):
    rec = s610_recording()
    rec.trailing = b"\x00\x01"
    with pytest.raises(MalformedRecordError) as exc:
        parse_exercise(write_srd(encode_srd(rec)))
    assert exc.value.phase == "checksum"


def test_invalid_date(write_srd):
    data = bytearray(encode_srd(s610_recording()))
    data[DATE_OFFSET + 4] = 0x13  # month 13
    with pytest.raises(MalformedRecordError) as exc:
        parse_exercise(write_srd(refresh(bytes(data))))
    assert exc.value.offset == DATE_OFFSET
    assert exc.value.phase == "header"


def test_invalid_bcd_digit(write_srd):
    data = bytearray(encode_srd(s610_recording()))
    data[DATE_OFFSET] = 0x7A
    with pytest.raises(MalformedRecordError) as exc:
        parse_exercise(write_srd(refresh(bytes(data))))
    assert exc.value.offset == DATE_OFFSET


def test_error_message_names_phase_and_path(write_srd):
    data = bytearray(encode_srd(s610_recording()))
    data[-1] ^= 0xFF
    path = write_srd(bytes(data))
    with pytest.raises(ParseError) as exc:
        parse_exercise(path)
    message = str(exc.value)
    assert "in phase checksum" in message
    assert str(path) in message


def test_decoding_is_deterministic(all_files):
    for path in all_files:
        assert parse_exercise(path) == parse_exercise(path)


def test_every_exercise_has_three_zones_and_regular_timestamps(all_files):
    for path in all_files:
        exercise = parse_exercise(path)
        assert len(exercise.heart_rate_limits) == 3
        interval_ms = exercise.recording_interval * 1000
        assert [s.timestamp for s in exercise.samples] == [i * interval_ms for i in range(len(exercise.samples))]
        splits = [lap.time_split for lap in exercise.laps]
        assert splits == sorted(splits)


def test_last_sample_reaches_exercise_distance(all_files):
    for path in all_files:
        exercise = parse_exercise(path)
        if not exercise.recording_mode.speed:
            continue
        assert exercise.samples[0].distance == 0
        assert exercise.samples[-1].distance == exercise.speed.distance


def test_cumulative_distances():
    assert cumulative_distances([36.0, 36.0, 0.0], 5) == [0, 50, 100]
    assert cumulative_distances([36.0, 36.0, 0.0], 5, total_distance=110) == [0, 55, 110]
    # no movement: nothing to scale
    assert cumulative_distances([0.0, 0.0, 0.0], 5, total_distance=1200) == [0, 0, 0]
    assert cumulative_distances([], 5, total_distance=1200) == []


def test_parallel_decoding(all_files):
    expected = [parse_exercise(path) for path in all_files]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(parse_exercise, all_files * 4))
    assert results == expected * 4


def _to_english(rec):
    """Re-encode a metric rec with the closest English raw values."""
    def feet(m):
        return round(m / 0.3048)

    def fahrenheit(c):
        return round(c * 9 / 5 + 32)

    def per_mile(raw):
        return round(raw / 1.609344)

    rec.english = True
    a = rec.altitude_summary
    rec.altitude_summary = (feet(a[0]), feet(a[1]), feet(a[2]), fahrenheit(a[3]), fahrenheit(a[4]), fahrenheit(a[5]))
    s = rec.speed_summary
    rec.speed_summary = (per_mile(s[0]), per_mile(s[1]), per_mile(s[2]))
    for lap in rec.laps:
        alt, ascent, temp = lap.altitude
        lap.altitude = (feet(alt), feet(ascent), fahrenheit(temp))
        end, avg, dist = lap.speed
        lap.speed = (per_mile(end), per_mile(avg), per_mile(dist))
    for sample in rec.samples:
        sample.altitude = feet(sample.altitude)
        sample.speed = per_mile(sample.speed)
    return rec


def test_english_and_metric_recordings_agree(write_srd):
    metric = parse_exercise(write_srd(encode_srd(s710_cycling_metric_recording()), "metric.srd"))
    english = parse_exercise(write_srd(encode_srd(_to_english(s710_cycling_metric_recording())), "english.srd"))

    # tolerances cover the coarser English encoding
    assert english.altitude.altitude_avg == pytest.approx(metric.altitude.altitude_avg, abs=1)
    assert english.temperature.temperature_max == pytest.approx(metric.temperature.temperature_max, abs=1)
    assert english.speed.speed_max == pytest.approx(metric.speed.speed_max, abs=0.1)
    assert english.speed.distance == pytest.approx(metric.speed.distance, abs=161)
    for m_lap, e_lap in zip(metric.laps, english.laps):
        assert e_lap.altitude.ascent == pytest.approx(m_lap.altitude.ascent, abs=1)
        assert e_lap.speed.speed_avg == pytest.approx(m_lap.speed.speed_avg, abs=0.1)
        assert e_lap.speed.distance == pytest.approx(m_lap.speed.distance, abs=161)
    for m_sample, e_sample in zip(metric.samples, english.samples):
        assert e_sample.altitude == pytest.approx(m_sample.altitude, abs=1)
        assert e_sample.speed == pytest.approx(m_sample.speed, abs=0.1)
        assert e_sample.distance == pytest.approx(m_sample.distance, abs=60)

