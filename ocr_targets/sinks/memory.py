"""In-memory sinks, used by tests and library callers."""

from typing import Any, Dict, List, Optional, Union

from ocr_targets.sinks.base import OutputRecord, RowSink, SummarySink


class MemoryRowSink(RowSink):
    """Collects pushed records and remembers how they were pushed."""

    def __init__(self) -> None:
        self.items: List[OutputRecord] = []
        self.push_calls = 0

    def push_data(self, data: Union[OutputRecord, List[OutputRecord]]) -> None:
        self.push_calls += 1
        if isinstance(data, list):
            self.items.extend(dict(item) for item in data)
        else:
            self.items.append(dict(data))


class MemorySummarySink(SummarySink):
    """Keeps the last summary written."""

    def __init__(self) -> None:
        self.value: Optional[Dict[str, Any]] = None
        self.writes = 0

    def set_value(self, summary: Dict[str, Any]) -> None:
        self.writes += 1
        self.value = dict(summary)
