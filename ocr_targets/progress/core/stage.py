"""
Core Progress Stage Module

Defines the base ProgressStage class and stage status enumeration.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Dict, Any, Optional, List, Callable

logger = logging.getLogger(__name__)

# Callback failures in a row before the callback is dropped
MAX_CALLBACK_ERRORS = 5


class StageStatus(Enum):
    """Enumeration of progress stage statuses."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StageProgress:
    """Snapshot of stage progress handed to renderers."""
    current: int = 0
    total: Optional[int] = None
    status: StageStatus = StageStatus.PENDING
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class ProgressStage:
    """
    Base class for progress stages.

    Each stage represents a phase of the workflow (CSV parsing, row
    processing) and pushes snapshots of its progress to registered callbacks.
    """

    def __init__(self, name: str, description: str = "") -> None:
        """
        Initialize a progress stage.

        Args:
            name: Unique stage name (e.g., "csv_parsing")
            description: Human-readable description
        """
        self.name = name
        self.description = description
        self._lock = RLock()
        self._progress = StageProgress()
        self._callbacks: List[Callable] = []
        self._callback_errors: Dict[Callable, int] = {}

    @property
    def progress(self) -> StageProgress:
        """Get a copy of the current progress state."""
        with self._lock:
            return StageProgress(
                current=self._progress.current,
                total=self._progress.total,
                status=self._progress.status,
                message=self._progress.message,
                details=self._progress.details.copy(),
                error=self._progress.error
            )

    def add_callback(self, callback: Callable) -> None:
        """
        Add callback function to be called when progress updates.

        Args:
            callback: Function that accepts (stage_name, progress) arguments
        """
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)
                self._callback_errors[callback] = 0

    def remove_callback(self, callback: Callable) -> None:
        """Remove previously added callback."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
            self._callback_errors.pop(callback, None)

    def _notify_callbacks(self) -> None:
        """Notify registered callbacks, dropping ones that keep failing."""
        with self._lock:
            callbacks_copy = list(self._callbacks)
            progress_copy = self.progress

        # Call callbacks without holding lock
        for callback in callbacks_copy:
            try:
                callback(self.name, progress_copy)
                with self._lock:
                    self._callback_errors[callback] = 0
            except Exception as e:
                with self._lock:
                    errors = self._callback_errors.get(callback, 0) + 1
                    self._callback_errors[callback] = errors
                    logger.warning(
                        f"Callback error in stage {self.name}: {e}. Error count: {errors}"
                    )
                    if errors >= MAX_CALLBACK_ERRORS:
                        logger.error(
                            f"Disabling callback in stage {self.name} due to too many errors ({errors})"
                        )
                        self.remove_callback(callback)

    def update_progress(
        self,
        current: Optional[int] = None,
        total: Optional[int] = None,
        message: str = "",
        details: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None
    ) -> None:
        """
        Update stage progress information.

        Args:
            current: Current progress value
            total: Total expected value
            message: Status message
            details: Additional detail information (merged into existing)
            error: Error message (if any)
        """
        with self._lock:
            if current is not None:
                self._progress.current = current
            if total is not None:
                self._progress.total = total
            if message:
                self._progress.message = message
            if details is not None:
                self._progress.details.update(details)
            if error is not None:
                self._progress.error = error

        self._notify_callbacks()

    def start(self, total: Optional[int] = None, message: str = "") -> None:
        """Mark stage as started."""
        with self._lock:
            self._progress.status = StageStatus.RUNNING
            self._progress.current = 0
            if total is not None:
                self._progress.total = total
            if message:
                self._progress.message = message
            self._progress.error = None

        self._notify_callbacks()

    def complete(self, message: str = "") -> None:
        """Mark stage as completed."""
        with self._lock:
            self._progress.status = StageStatus.COMPLETED
            if message:
                self._progress.message = message
            if self._progress.total is not None:
                self._progress.current = self._progress.total

        self._notify_callbacks()

    def fail(self, error: str, message: str = "") -> None:
        """Mark stage as failed."""
        with self._lock:
            self._progress.status = StageStatus.FAILED
            self._progress.error = error
            if message:
                self._progress.message = message

        self._notify_callbacks()

    def skip(self, message: str = "") -> None:
        """Mark stage as skipped."""
        with self._lock:
            self._progress.status = StageStatus.SKIPPED
            if message:
                self._progress.message = message

        self._notify_callbacks()

    def __str__(self) -> str:
        progress = self.progress
        return f"{self.name} ({progress.status.value}): {progress.message}"
