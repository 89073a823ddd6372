"""
Local Storage Sinks

File-backed sinks laid out like the hosting platform's local storage:

    storage/
        datasets/default/000000001.json, 000000002.json, ...
        key_value_stores/default/INPUT.json, OUTPUT.json
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ocr_targets.exceptions import SinkError
from ocr_targets.sinks.base import OutputRecord, RowSink, SummarySink

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = 'default'
OUTPUT_KEY = 'OUTPUT'
INPUT_KEY = 'INPUT'


def dataset_dir(storage_dir: Path, name: str = DEFAULT_STORE_NAME) -> Path:
    """Directory holding the items of a named dataset."""
    return storage_dir / 'datasets' / name


def key_value_store_dir(storage_dir: Path, name: str = DEFAULT_STORE_NAME) -> Path:
    """Directory holding the records of a named key-value store."""
    return storage_dir / 'key_value_stores' / name


def _write_json(path: Path, payload: Any) -> None:
    try:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SinkError(f"Cannot serialize payload for {path.name}: {e}")

    try:
        path.write_text(text + '\n', encoding='utf-8')
    except OSError as e:
        raise SinkError(f"Failed to write {path}: {e}")


class DatasetRowSink(RowSink):
    """
    Writes each output record as its own numbered JSON file.

    Existing items are cleared when the sink is created so a run never mixes
    its records with a previous run's.
    """

    def __init__(self, directory: Path, purge: bool = True) -> None:
        self.directory = directory
        self._count = 0

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            if purge:
                for old_item in self.directory.glob('*.json'):
                    old_item.unlink()
        except OSError as e:
            raise SinkError(f"Cannot prepare dataset directory {directory}: {e}")

        logger.debug(f"Dataset sink ready: {self.directory}")

    @property
    def item_count(self) -> int:
        return self._count

    def push_data(self, data: Union[OutputRecord, List[OutputRecord]]) -> None:
        items = data if isinstance(data, list) else [data]
        for item in items:
            self._count += 1
            _write_json(self.directory / f"{self._count:09d}.json", item)
        logger.debug(f"Pushed {len(items)} item(s) to dataset ({self._count} total)")


class KeyValueSummarySink(SummarySink):
    """Writes the run summary to a single key in a key-value store directory."""

    def __init__(self, directory: Path, key: str = OUTPUT_KEY) -> None:
        self.directory = directory
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def set_value(self, summary: Dict[str, Any]) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create key-value store {self.directory}: {e}")
        _write_json(self.path, summary)
        logger.debug(f"Stored {self.key} in {self.directory}")
