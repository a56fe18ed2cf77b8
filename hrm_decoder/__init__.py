"""Decoder for Polar S-series raw exercise files.

Modules:
- io: Byte cursor, unit conversion and format dispatch
- parsers: One module per file-format variant
- models: Exercise types and the validating builder
- decoder: parse_exercise entry point
- storage: DataFrame views and CSV export
- cli: Command line interface
"""

from .decoder import parse_exercise
from .errors import (
    ChecksumMismatchError,
    CorruptFileError,
    MalformedRecordError,
    MissingFileError,
    ParseError,
    UnreadableFileError,
    UnsupportedFormatError,
)
from .models.types import Exercise, ExerciseFileType, HeartRateLimit, Lap, RecordingMode, Sample

__version__ = "1.0.0"

__all__ = [
    "parse_exercise",
    "Exercise",
    "ExerciseFileType",
    "HeartRateLimit",
    "Lap",
    "RecordingMode",
    "Sample",
    "ParseError",
    "MissingFileError",
    "UnreadableFileError",
    "UnsupportedFormatError",
    "MalformedRecordError",
    "ChecksumMismatchError",
    "CorruptFileError",
]
