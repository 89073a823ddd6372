"""
Sink Interfaces

Destinations for workflow output: a row sink that receives output records
(one at a time or as a batch) and a summary sink holding the single run
summary.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

OutputRecord = Dict[str, str]


class RowSink(ABC):
    """Receives output records in workflow order."""

    @abstractmethod
    def push_data(self, data: Union[OutputRecord, List[OutputRecord]]) -> None:
        """
        Persist one output record or a list of them.

        Raises:
            SinkError: If the data cannot be stored
        """
        pass


class SummarySink(ABC):
    """Single named slot for the run summary. Each call overwrites the last."""

    @abstractmethod
    def set_value(self, summary: Dict[str, Any]) -> None:
        """
        Store the run summary.

        Raises:
            SinkError: If the summary cannot be stored
        """
        pass
