"""Command-line configuration"""
from ocr_targets.cli.config import (
    ActorInput,
    load_actor_input,
    parse_arguments,
    read_csv_file,
    resolve_actor_input,
)

__all__ = [
    "ActorInput",
    "load_actor_input",
    "parse_arguments",
    "read_csv_file",
    "resolve_actor_input",
]
