"""
Logging Manager - Core Handler Management

LoggingManager provides file logging plus a console handler that is muted
while a progress display is running. Warnings raised meanwhile are buffered
and shown afterwards; errors are shown immediately as Rich panels.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import List, Optional, Tuple, Iterator

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ocr_targets.logging.handlers import ProgressAwareConsoleHandler

logger = logging.getLogger(__name__)

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MAX_BUFFERED_WARNINGS = 50


class LoggingManager:
    """
    Thread-safe logging manager with dynamic console handler control.

    Progress mode is reference counted so nested enable/disable pairs are
    safe; console output is only restored when the outermost pair ends.
    """

    _global_lock = RLock()
    _instance: Optional['LoggingManager'] = None

    def __init__(self, error_console: Optional[Console] = None) -> None:
        """
        Initialize logging manager.

        Args:
            error_console: Rich console for critical errors (default: stderr)
        """
        self._lock = RLock()
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []

        self._progress_mode_count = 0
        self._buffered_warnings: List[Tuple[float, str]] = []
        self._error_console = error_console

    @classmethod
    def get_instance(cls) -> 'LoggingManager':
        """Get or create singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    def setup(self, log_file: Optional[Path], console_level: int = logging.WARNING) -> None:
        """
        Configure logging to file and console with different log levels.

        Args:
            log_file: Path to the log file (None disables file logging)
            console_level: Logging level for console output (default: WARNING)
                          - WARNING: Only errors and warnings (minimal output)
                          - INFO: Workflow steps (--verbose)
                          - DEBUG: All technical details (--debug)
        """
        with self._lock:
            console_formatter = logging.Formatter(
                '%(levelname)s - %(message)s' if console_level >= logging.INFO
                else '%(message)s'
            )

            self._console_handler = ProgressAwareConsoleHandler(
                stream=sys.stdout,
                logging_manager=self
            )
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(console_formatter)

            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)
            self._original_handlers = root_logger.handlers.copy()
            root_logger.handlers.clear()

            if log_file is not None:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                # File handler always logs at DEBUG for full details
                self._file_handler = logging.FileHandler(log_file, encoding='utf-8')
                self._file_handler.setLevel(logging.DEBUG)
                self._file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
                root_logger.addHandler(self._file_handler)

            root_logger.addHandler(self._console_handler)

            logger.debug("Logging manager setup complete")

    def enable_progress_mode(self) -> None:
        """Suppress console logging while a progress display is active."""
        with self._lock:
            self._progress_mode_count += 1
            if self._progress_mode_count == 1:
                self._buffered_warnings.clear()
                if self._console_handler:
                    self._console_handler.set_progress_mode(True)
                logger.debug("Progress mode enabled - console logging suppressed")

    def disable_progress_mode(self) -> None:
        """Restore console logging and show buffered warnings."""
        with self._lock:
            if self._progress_mode_count == 0:
                return
            self._progress_mode_count -= 1
            if self._progress_mode_count == 0:
                if self._console_handler:
                    self._console_handler.set_progress_mode(False)
                self._display_buffered_warnings()
                logger.debug("Progress mode disabled - console logging restored")

    @contextmanager
    def progress_mode(self) -> Iterator[None]:
        """
        Context manager for progress mode with guaranteed cleanup.

        Usage:
            with logging_manager.progress_mode():
                # Console logging suppressed
                pass
            # Console logging automatically restored
        """
        self.enable_progress_mode()
        try:
            yield
        finally:
            self.disable_progress_mode()

    def is_progress_mode_active(self) -> bool:
        with self._lock:
            return self._progress_mode_count > 0

    @property
    def buffered_warnings(self) -> List[str]:
        with self._lock:
            return [message for _, message in self._buffered_warnings]

    def buffer_warning(self, record: logging.LogRecord) -> None:
        """
        Buffer a warning message for display once progress mode ends.

        Args:
            record: LogRecord to buffer
        """
        with self._lock:
            if len(self._buffered_warnings) >= MAX_BUFFERED_WARNINGS:
                self._buffered_warnings.pop(0)
            if self._console_handler:
                message = self._console_handler.format(record)
            else:
                message = record.getMessage()
            self._buffered_warnings.append((time.time(), message))

    def display_critical_error(self, record: logging.LogRecord) -> None:
        """
        Display an error immediately as a Rich panel on stderr.

        Args:
            record: LogRecord to display
        """
        if self._error_console is None:
            self._error_console = Console(stderr=True)

        error_text = Text()
        error_text.append("ERROR", style="bold red")
        if record.name:
            error_text.append(f" ({record.name})", style="dim red")
        error_text.append(f": {record.getMessage()}", style="red")
        error_text.append(f"\nLocation: {record.funcName}() line {record.lineno}", style="dim")

        self._error_console.print(Panel(
            error_text,
            title="Critical Error",
            border_style="red",
            padding=(0, 1),
            expand=False,
        ))

    def _display_buffered_warnings(self) -> None:
        if not self._buffered_warnings:
            return

        stream = self._console_handler.stream if self._console_handler else sys.stdout
        stream.write(f"\n{len(self._buffered_warnings)} warning(s) occurred during processing:\n")
        stream.write("-" * 60 + "\n")
        now = time.time()
        for timestamp, message in self._buffered_warnings:
            stream.write(f"[{now - timestamp:.1f}s ago] {message}\n")
        stream.write("-" * 60 + "\n")
        stream.flush()
        self._buffered_warnings.clear()

    def cleanup(self) -> None:
        """Restore the original root handlers and close the log file."""
        with self._lock:
            self._progress_mode_count = 0
            if self._console_handler:
                self._console_handler.set_progress_mode(False)
            self._display_buffered_warnings()

            root_logger = logging.getLogger()
            root_logger.handlers.clear()
            root_logger.handlers.extend(self._original_handlers)

            if self._file_handler:
                self._file_handler.close()
                self._file_handler = None
