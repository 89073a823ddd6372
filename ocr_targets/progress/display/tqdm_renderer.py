"""
tqdm Progress Renderer

Plain progress bars for non-interactive environments and log-friendly output.
"""

import sys
from threading import RLock
from typing import Any, Dict, Optional, TextIO

from tqdm import tqdm

from ocr_targets.progress.core.tracker import ProgressRenderer
from ocr_targets.progress.core.stage import StageStatus, StageProgress

STATUS_PREFIXES = {
    StageStatus.COMPLETED: "✓",
    StageStatus.FAILED: "✗",
    StageStatus.SKIPPED: "⊙",
}


class TqdmProgressRenderer(ProgressRenderer):
    """tqdm-based progress renderer with one bar per stage."""

    def __init__(self, file: Optional[TextIO] = None, disable_on_non_tty: bool = True) -> None:
        """
        Initialize tqdm progress renderer.

        Args:
            file: Output stream (defaults to stderr)
            disable_on_non_tty: Disable bars when the stream is not a terminal
        """
        self.file = file or sys.stderr
        self.disable_on_non_tty = disable_on_non_tty
        self._lock = RLock()
        self._progress_bars: Dict[str, tqdm] = {}
        self._is_started = False

    def start(self) -> None:
        with self._lock:
            self._is_started = True

    def stop(self) -> None:
        with self._lock:
            for pbar in self._progress_bars.values():
                pbar.close()
            self._progress_bars.clear()
            self._is_started = False

    def update_stage(self, stage_name: str, stage_progress: StageProgress) -> None:
        """Create or advance the bar for a stage."""
        if not self._is_started:
            return

        with self._lock:
            description = self._format_description(stage_name, stage_progress)
            pbar = self._progress_bars.get(stage_name)

            if pbar is None:
                disable = self.disable_on_non_tty and not (
                    hasattr(self.file, 'isatty') and self.file.isatty()
                )
                pbar = tqdm(
                    desc=description,
                    total=stage_progress.total or None,
                    initial=stage_progress.current,
                    file=self.file,
                    disable=disable,
                    ascii=True,
                    unit='rows',
                    dynamic_ncols=True,
                    position=len(self._progress_bars)
                )
                self._progress_bars[stage_name] = pbar
                return

            if stage_progress.total and stage_progress.total != pbar.total:
                pbar.total = stage_progress.total

            diff = stage_progress.current - pbar.n
            if diff:
                pbar.update(diff)

            pbar.set_description(description)
            if stage_progress.status == StageStatus.FAILED and stage_progress.error:
                pbar.write(f"Error in {stage_name}: {stage_progress.error}")

    def _format_description(self, stage_name: str, stage_progress: StageProgress) -> str:
        display_name = stage_name.replace('_', ' ').title()
        prefix = STATUS_PREFIXES.get(stage_progress.status)
        description = f"{prefix} {display_name}" if prefix else display_name
        if stage_progress.message:
            description += f": {stage_progress.message}"
        return description

    def display_completion_summary(self, summary: Dict[str, Any]) -> None:
        tqdm.write(
            f"Run {summary.get('reason', '')}: "
            f"{summary.get('processed_rows', 0)}/{summary.get('total_rows', 0)} row(s) processed, "
            f"{summary.get('error_count', 0)} error(s)",
            file=self.file
        )
