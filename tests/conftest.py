import pytest

from srd_builder import (
    encode_srd,
    s610_recording,
    s625x_recording,
    s710_cycling_english_recording,
    s710_cycling_metric_recording,
    s710_nospeed_recording,
    s710_running_metric_recording,
)


@pytest.fixture
def write_srd(tmp_path):
    """Write raw bytes to ``<name>`` under tmp_path and return the path."""
    def _write(data, name="exercise.srd"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def s610_file(write_srd):
    return write_srd(encode_srd(s610_recording()), "s610.srd")


@pytest.fixture
def s710_metric_file(write_srd):
    return write_srd(encode_srd(s710_cycling_metric_recording()), "s710_metric.srd")


@pytest.fixture
def s710_english_file(write_srd):
    return write_srd(encode_srd(s710_cycling_english_recording()), "s710_english.srd")


@pytest.fixture
def s710_nospeed_file(write_srd):
    return write_srd(encode_srd(s710_nospeed_recording()), "s710_nospeed.srd")


@pytest.fixture
def s710_running_file(write_srd):
    return write_srd(encode_srd(s710_running_metric_recording()), "s710_running.srd")


@pytest.fixture
def s625x_file(write_srd):
    return write_srd(encode_srd(s625x_recording()), "s625x.srd")


@pytest.fixture
def all_files(s610_file, s710_metric_file, s710_english_file, s710_nospeed_file, s710_running_file, s625x_file):
    return [s610_file, s710_metric_file, s710_english_file, s710_nospeed_file, s710_running_file, s625x_file]
