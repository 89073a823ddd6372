"""
Progress-Aware Console Handler

Custom logging handler that stays out of the way of the progress display.
"""

import logging
import sys
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ocr_targets.logging.manager import LoggingManager


class ProgressAwareConsoleHandler(logging.StreamHandler):
    """
    Console handler that respects progress mode.

    When progress mode is active:
    - ERROR messages are displayed immediately via Rich panels
    - WARNING messages are buffered for later display
    - INFO/DEBUG messages are suppressed (the file log still has them)

    When progress mode is inactive it behaves like a normal StreamHandler.
    """

    def __init__(self, stream=None, logging_manager: Optional['LoggingManager'] = None) -> None:
        """
        Initialize progress-aware console handler.

        Args:
            stream: Output stream (default: sys.stdout)
            logging_manager: LoggingManager instance for coordination
        """
        super().__init__(stream or sys.stdout)
        self._logging_manager = logging_manager
        self._progress_mode = False

    @property
    def progress_mode(self) -> bool:
        return self._progress_mode

    def set_progress_mode(self, enabled: bool) -> None:
        """Enable or disable progress mode."""
        self._progress_mode = enabled

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record with progress-aware handling.

        Args:
            record: LogRecord to emit
        """
        if not self._progress_mode:
            super().emit(record)
            return

        try:
            if record.levelno >= logging.ERROR:
                if self._logging_manager:
                    self._logging_manager.display_critical_error(record)
                else:
                    sys.stderr.write(f"{self.format(record)}\n")
                    sys.stderr.flush()
            elif record.levelno >= logging.WARNING:
                if self._logging_manager:
                    self._logging_manager.buffer_warning(record)
        except Exception:
            self.handleError(record)
