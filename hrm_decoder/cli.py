from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from .config import SRD_EXTENSIONS, get_config
from .decoder import parse_exercise
from .errors import ParseError
from .models.types import Exercise
from .storage.export import exercise_summary, export_laps_csv, export_samples_csv

logger = logging.getLogger(__name__)


def _iter_exercise_files(inputs: List[str]) -> List[str]:
    files: List[str] = []
    for inp in inputs:
        p = Path(inp)
        if p.is_dir():
            files.extend(
                [
                    str(fp)
                    for fp in p.rglob("*")
                    if fp.is_file() and not fp.name.startswith(".") and fp.suffix.lower() in SRD_EXTENSIONS
                ]
            )
        else:
            # Missing paths are kept so the decoder reports them
            files.append(str(p))
    # Deduplicate and sort
    return sorted(list(dict.fromkeys(files)))


def _describe(exercise: Exercise) -> str:
    mode = exercise.recording_mode
    sensors = [name for name in ("altitude", "speed", "cadence", "power") if getattr(mode, name)]
    return (
        f"{exercise.date_time:%Y-%m-%d %H:%M:%S} {exercise.file_type.value} '{exercise.exercise_type.strip()}' "
        f"{exercise.duration_seconds:.1f}s, HR avg/max {exercise.heart_rate_avg}/{exercise.heart_rate_max}, "
        f"{len(exercise.laps)} laps, {len(exercise.samples)} samples, sensors: {', '.join(sensors) or 'none'}"
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode Polar S-series raw exercise files (.srd)")
    parser.add_argument("--input", nargs="+", required=True, help="One or more exercise files or directories")
    parser.add_argument("--output", help="Directory for per-exercise sample and lap CSV exports")
    parser.add_argument("--json", action="store_true", help="Print the exercise summary as JSON")
    parser.add_argument("--log-level", help="Logging level (default: HRM_DECODER_LOG_LEVEL or WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)
    settings = get_config()
    logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format=settings.log_format)

    files = _iter_exercise_files(args.input)
    if args.output:
        os.makedirs(args.output, exist_ok=True)

    failures = 0
    for file_path in files:
        try:
            exercise = parse_exercise(file_path)
        except ParseError as e:
            logger.error(f"Skipping {file_path}: {e}")
            failures += 1
            continue

        if args.json:
            print(json.dumps({"source_file": file_path, **exercise_summary(exercise)}))
        else:
            print(f"{Path(file_path).name}: {_describe(exercise)}")

        if args.output:
            stem = Path(file_path).stem
            export_samples_csv(exercise, os.path.join(args.output, f"{stem}_samples.csv"))
            export_laps_csv(exercise, os.path.join(args.output, f"{stem}_laps.csv"))

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
