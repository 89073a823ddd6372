"""
Core Progress Tracking Components

Contains the main tracker and stage base classes.
"""

from ocr_targets.progress.core.tracker import (
    ProgressTracker,
    ProgressRenderer,
    ProgressMode,
    select_renderer,
)
from ocr_targets.progress.core.stage import ProgressStage, StageStatus, StageProgress

__all__ = [
    'ProgressTracker',
    'ProgressRenderer',
    'ProgressMode',
    'select_renderer',
    'ProgressStage',
    'StageStatus',
    'StageProgress',
]
