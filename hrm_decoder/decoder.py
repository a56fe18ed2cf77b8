"""Entry point: decode one exercise file into an ``Exercise``.

Decoding runs the phases Header -> Zones -> Laps -> Samples -> Checksum over
a single cursor. Any failure aborts the whole parse; the error records the
phase it happened in.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Union

from .config import CHECKSUM_SIZE
from .errors import MalformedRecordError, MissingFileError, ParseError, UnreadableFileError
from .io.cursor import BinaryCursor
from .io.dispatch import select_variant
from .models.builder import build_exercise
from .models.types import Exercise
from .parsers.common import FormatVariant, ParsedSections

logger = logging.getLogger(__name__)


class ParsePhase(str, Enum):
    HEADER = "header"
    ZONES = "zones"
    LAPS = "laps"
    SAMPLES = "samples"
    CHECKSUM = "checksum"
    BUILD = "build"


def _read_file(path: Path) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except FileNotFoundError as e:
        raise MissingFileError("exercise file not found", path=str(path)) from e
    except OSError as e:
        raise UnreadableFileError(f"cannot read exercise file ({e})", path=str(path)) from e


def _verify_trailer(cursor: BinaryCursor) -> None:
    if cursor.remaining != CHECKSUM_SIZE:
        raise MalformedRecordError(
            f"expected {CHECKSUM_SIZE} checksum bytes after the samples, found {cursor.remaining}",
            offset=cursor.offset,
        )
    expected = cursor.read_checksum()
    cursor.verify_checksum(expected)


def run_phases(variant: FormatVariant, cursor: BinaryCursor) -> ParsedSections:
    """Drive ``variant`` through all decoding phases."""
    phase = ParsePhase.HEADER
    try:
        header = variant.read_header(cursor)
        phase = ParsePhase.ZONES
        limits = variant.read_zones(cursor, header)
        phase = ParsePhase.LAPS
        laps = variant.read_laps(cursor, header)
        phase = ParsePhase.SAMPLES
        samples = variant.read_samples(cursor, header)
        phase = ParsePhase.CHECKSUM
        _verify_trailer(cursor)
    except ParseError as e:
        e.phase = phase.value
        raise
    logger.debug(f"{variant.file_type.value}: all phases done at offset {cursor.offset}")
    return ParsedSections(header=header, heart_rate_limits=limits, laps=laps, samples=samples)


def parse_exercise(path: Union[str, Path]) -> Exercise:
    """Decode the exercise file at ``path``.

    Raises a ``ParseError`` subclass: ``MissingFileError``,
    ``UnsupportedFormatError``, ``MalformedRecordError``,
    ``ChecksumMismatchError`` or ``CorruptFileError``.
    """
    path = Path(path)
    try:
        data = _read_file(path)
        variant = select_variant(path, data)
        sections = run_phases(variant, BinaryCursor(data))
        try:
            exercise = build_exercise(sections)
        except ParseError as e:
            e.phase = ParsePhase.BUILD.value
            raise
    except ParseError as e:
        if e.path is None:
            e.path = str(path)
        logger.warning(f"Failed to parse {path}: {e}")
        raise

    logger.info(f"Parsed {path.name}: {exercise.file_type.value}, {len(exercise.laps)} laps, {len(exercise.samples)} samples")
    return exercise
