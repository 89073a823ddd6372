"""
CLI Configuration Module

Handles command-line argument parsing, environment configuration and
loading of the run input (CSV payload and row cap).
"""

import os
import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from ocr_targets.exceptions import InputError
from ocr_targets.mapping.canonical import FieldMapping
from ocr_targets.progress.core import ProgressMode
from ocr_targets.sinks.local_storage import INPUT_KEY, key_value_store_dir
from ocr_targets.workflows.ocr_targets import EmissionMode

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = './storage'
DEFAULT_LOG_FILE = './logs/ocr_targets.log'


@dataclass
class ActorInput:
    """
    Run input.

    Attributes:
        ocr_targets_csv: Raw CSV text (may be None or empty)
        max_files: Optional row cap, passed through as given
    """
    ocr_targets_csv: Optional[str] = None
    max_files: Any = None


def load_actor_input(input_path: Path) -> ActorInput:
    """
    Load run input from a JSON object with 'ocrTargetsCsv' and 'maxFiles'.

    A missing file yields an empty input. A null or non-string CSV value is
    tolerated: null becomes None, other values are converted to str.

    Args:
        input_path: Path to the input JSON file

    Returns:
        ActorInput with the parsed values

    Raises:
        InputError: If the file cannot be read or is not a JSON object
    """
    if not input_path.exists():
        logger.debug(f"No input file at {input_path}")
        return ActorInput()

    try:
        with input_path.open('r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read input file '{input_path}': {e}")
    except json.JSONDecodeError as e:
        raise InputError(f"Input file '{input_path}' is not valid JSON: {e}")

    if payload is None:
        return ActorInput()

    if not isinstance(payload, dict):
        raise InputError(
            f"Input file '{input_path}' must contain a JSON object, got {type(payload).__name__}"
        )

    csv_value = payload.get('ocrTargetsCsv')
    return ActorInput(
        ocr_targets_csv=None if csv_value is None else str(csv_value),
        max_files=payload.get('maxFiles'),
    )


def read_csv_file(csv_path: Path) -> str:
    """
    Read CSV text from disk.

    Raises:
        InputError: If the file does not exist or cannot be decoded
    """
    if not csv_path.is_file():
        raise InputError(f"CSV file not found: {csv_path.absolute()}")
    try:
        return csv_path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read CSV file '{csv_path}': {e}")


def parse_max_files(value: str) -> Optional[float]:
    """argparse type for --max-files: a number, or empty for no cap."""
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid --max-files value: '{value}'")
    return int(number) if number.is_integer() else number


def _env_choice(name: str, default: str, choices: List[str]) -> str:
    value = os.getenv(name, default)
    if value not in choices:
        logger.warning(f"Invalid {name} value '{value}', using default '{default}'")
        return default
    return value


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and load environment configuration.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - log_file: Path
            - console_log_level: int
            - input_path: Path
            - emission_mode: EmissionMode
            - field_mapping_mode: FieldMapping
            - progress_mode: ProgressMode
    """
    # Load environment variables from .env file (if present)
    load_dotenv()

    env_storage_dir = os.getenv('STORAGE_DIR', DEFAULT_STORAGE_DIR)
    env_log_file = os.getenv('LOG_FILE', DEFAULT_LOG_FILE)
    env_input_file = os.getenv('INPUT_FILE')
    env_csv_file = os.getenv('OCR_TARGETS_CSV_FILE')
    env_max_files = os.getenv('MAX_FILES', '')

    emission_choices = [mode.value for mode in EmissionMode]
    mapping_choices = [mapping.value for mapping in FieldMapping]
    progress_choices = [mode.value for mode in ProgressMode]

    env_emission = _env_choice('EMISSION', EmissionMode.PER_ROW.value, emission_choices)
    env_field_mapping = _env_choice('FIELD_MAPPING', FieldMapping.CANONICAL.value, mapping_choices)
    env_progress = _env_choice('PROGRESS', ProgressMode.AUTO.value, progress_choices)

    default_max_files = None
    if env_max_files.strip():
        try:
            default_max_files = parse_max_files(env_max_files)
        except argparse.ArgumentTypeError:
            logger.warning(f"Invalid MAX_FILES value '{env_max_files}', processing all rows")

    parser = argparse.ArgumentParser(
        description='Parse an OCR targets CSV and emit one record per attachment row'
    )
    parser.add_argument(
        '--input',
        type=Path,
        default=Path(env_input_file) if env_input_file else None,
        help='Input JSON with ocrTargetsCsv and maxFiles '
             '(default: <storage-dir>/key_value_stores/default/INPUT.json)'
    )
    parser.add_argument(
        '--csv-file',
        type=Path,
        default=Path(env_csv_file) if env_csv_file else None,
        help='Read the CSV payload from this file instead of the input JSON'
    )
    parser.add_argument(
        '--max-files',
        type=parse_max_files,
        default=default_max_files,
        help='Maximum number of rows to process (default: all rows)'
    )
    parser.add_argument(
        '--storage-dir',
        type=Path,
        default=Path(env_storage_dir),
        help=f'Local storage directory for dataset and summary (default: {env_storage_dir})'
    )
    parser.add_argument(
        '--emission',
        choices=emission_choices,
        default=env_emission,
        help='Push output records one per row or as one batch (default: %(default)s)'
    )
    parser.add_argument(
        '--field-mapping',
        choices=mapping_choices,
        default=env_field_mapping,
        help='Output canonical attachment fields or the CSV headers as is (default: %(default)s)'
    )
    parser.add_argument(
        '--progress',
        choices=progress_choices,
        default=env_progress,
        help='Progress display (default: %(default)s)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show workflow steps on the console'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Show all technical details on the console'
    )

    args = parser.parse_args(argv)

    args.log_file = Path(env_log_file)
    if args.debug:
        args.console_log_level = logging.DEBUG
    elif args.verbose:
        args.console_log_level = logging.INFO
    else:
        args.console_log_level = logging.WARNING

    args.input_path = args.input or key_value_store_dir(args.storage_dir) / f"{INPUT_KEY}.json"
    args.emission_mode = EmissionMode(args.emission)
    args.field_mapping_mode = FieldMapping(args.field_mapping)
    args.progress_mode = ProgressMode(args.progress)

    return args


def resolve_actor_input(args: argparse.Namespace) -> ActorInput:
    """
    Build the run input from the input JSON and command-line overrides.

    --csv-file replaces the CSV payload and --max-files replaces the cap.

    Raises:
        InputError: If the input JSON or CSV file cannot be read
    """
    actor_input = load_actor_input(args.input_path)

    if args.csv_file is not None:
        logger.info(f"Reading CSV payload from {args.csv_file}")
        actor_input.ocr_targets_csv = read_csv_file(args.csv_file)

    if args.max_files is not None:
        actor_input.max_files = args.max_files

    return actor_input
