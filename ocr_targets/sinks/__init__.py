"""Output sinks"""
from ocr_targets.sinks.base import OutputRecord, RowSink, SummarySink
from ocr_targets.sinks.memory import MemoryRowSink, MemorySummarySink
from ocr_targets.sinks.local_storage import (
    DatasetRowSink,
    KeyValueSummarySink,
    dataset_dir,
    key_value_store_dir,
    DEFAULT_STORE_NAME,
    INPUT_KEY,
    OUTPUT_KEY,
)

__all__ = [
    "OutputRecord",
    "RowSink",
    "SummarySink",
    "MemoryRowSink",
    "MemorySummarySink",
    "DatasetRowSink",
    "KeyValueSummarySink",
    "dataset_dir",
    "key_value_store_dir",
    "DEFAULT_STORE_NAME",
    "INPUT_KEY",
    "OUTPUT_KEY",
]
