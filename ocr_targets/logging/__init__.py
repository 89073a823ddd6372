"""
Logging Module - Progress-Aware Logging System

Keeps console logging from fighting with the progress display: while
progress is shown, console INFO/DEBUG is muted, warnings are buffered and
errors are shown as Rich panels. File logging is never affected.

Usage:
    from ocr_targets.logging import LoggingManager

    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)

    with manager.progress_mode():
        pass
"""

from ocr_targets.logging.manager import LoggingManager
from ocr_targets.logging.handlers import ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'ProgressAwareConsoleHandler',
]
