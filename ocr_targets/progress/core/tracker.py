"""
Core Progress Tracker Module

Main progress tracker class that coordinates stages and a renderer.
"""

import logging
import sys
from abc import ABC, abstractmethod
from enum import Enum
from threading import RLock
from typing import Dict, Optional, Any, TYPE_CHECKING

from ocr_targets.progress.core.stage import ProgressStage, StageStatus

if TYPE_CHECKING:
    from ocr_targets.logging import LoggingManager

logger = logging.getLogger(__name__)


class ProgressMode(Enum):
    """Progress display modes."""
    AUTO = "auto"      # Rich on a terminal, tqdm otherwise
    RICH = "rich"      # Force the Rich live display
    TQDM = "tqdm"      # Force plain tqdm bars
    OFF = "off"        # Disable progress display


class ProgressRenderer(ABC):
    """Abstract base class for progress renderers."""

    @abstractmethod
    def start(self) -> None:
        """Start the progress display."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the progress display."""
        pass

    @abstractmethod
    def update_stage(self, stage_name: str, stage_progress: Any) -> None:
        """Update progress for a specific stage."""
        pass

    def display_completion_summary(self, summary: Dict[str, Any]) -> None:
        """Display run summary. Default no-op."""
        return


def select_renderer(mode: ProgressMode) -> Optional[ProgressRenderer]:
    """
    Build the renderer for a progress mode.

    Args:
        mode: Requested progress mode

    Returns:
        Renderer instance, or None when progress is disabled
    """
    # Imported here to avoid circular imports with the display package
    from ocr_targets.progress.display.rich_renderer import RichProgressRenderer
    from ocr_targets.progress.display.tqdm_renderer import TqdmProgressRenderer

    if mode == ProgressMode.OFF:
        return None
    if mode == ProgressMode.RICH:
        return RichProgressRenderer()
    if mode == ProgressMode.TQDM:
        return TqdmProgressRenderer()

    if sys.stdout.isatty():
        return RichProgressRenderer()
    return TqdmProgressRenderer()


class ProgressTracker:
    """
    Main progress tracker that coordinates stages and rendering.

    Integrates with LoggingManager so console logging does not interfere
    with the progress display while it is running.
    """

    def __init__(
        self,
        mode: ProgressMode = ProgressMode.AUTO,
        logging_manager: Optional["LoggingManager"] = None,
        renderer: Optional[ProgressRenderer] = None,
    ) -> None:
        """
        Initialize progress tracker.

        Args:
            mode: Progress display mode
            logging_manager: LoggingManager instance (optional)
            renderer: Explicit renderer, overrides mode-based selection
        """
        self.mode = mode
        self._lock = RLock()
        self._stages: Dict[str, ProgressStage] = {}
        self._renderer = renderer
        self._is_started = False

        self._logging_manager = logging_manager
        self._logging_mode_active = False

    @property
    def is_active(self) -> bool:
        return self._is_started and self.mode != ProgressMode.OFF

    def add_stage(self, stage: ProgressStage) -> None:
        """
        Add a progress stage to track.

        Args:
            stage: ProgressStage instance to add
        """
        with self._lock:
            self._stages[stage.name] = stage
            stage.add_callback(self._on_stage_update)

    def start(self) -> None:
        """Start progress tracking and display."""
        with self._lock:
            if self._is_started:
                return

            if self.mode != ProgressMode.OFF:
                if self._renderer is None:
                    self._renderer = select_renderer(self.mode)

                if self._logging_manager:
                    self._logging_manager.enable_progress_mode()
                    self._logging_mode_active = True

                if self._renderer:
                    try:
                        self._renderer.start()
                        logger.debug(f"Started progress renderer: {type(self._renderer).__name__}")
                    except Exception as e:
                        logger.warning(f"Failed to start progress renderer: {e}")
                        self._renderer = None

            self._is_started = True

    def stop(self) -> None:
        """Stop progress tracking and display."""
        with self._lock:
            if not self._is_started:
                return

            if self._renderer:
                try:
                    self._renderer.stop()
                    logger.debug(f"Stopped progress renderer: {type(self._renderer).__name__}")
                except Exception as e:
                    logger.warning(f"Error stopping progress renderer: {e}")

            if self._logging_manager and self._logging_mode_active:
                self._logging_manager.disable_progress_mode()
                self._logging_mode_active = False

            self._is_started = False

    def _on_stage_update(self, stage_name: str, stage_progress) -> None:
        """Forward stage updates to the renderer."""
        if self._renderer and self.is_active:
            try:
                self._renderer.update_stage(stage_name, stage_progress)
            except Exception as e:
                logger.warning(f"Renderer update failed for stage {stage_name}: {e}")

    def get_summary(self) -> Dict[str, Dict]:
        """Get summary of all stages."""
        with self._lock:
            summary = {}
            for name, stage in self._stages.items():
                progress = stage.progress
                summary[name] = {
                    'status': progress.status.value,
                    'current': progress.current,
                    'total': progress.total,
                    'message': progress.message,
                    'error': progress.error,
                    'details': progress.details
                }
            return summary

    def has_failures(self) -> bool:
        """Check if any stage has failed."""
        with self._lock:
            return any(
                stage.progress.status == StageStatus.FAILED
                for stage in self._stages.values()
            )

    def display_completion_summary(self, summary: Dict[str, Any]) -> None:
        """Display the run summary via the renderer when available."""
        if self._renderer and self.is_active:
            try:
                self._renderer.display_completion_summary(summary)
            except Exception as e:
                logger.warning(f"Failed to display completion summary: {e}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
