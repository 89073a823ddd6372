"""
Progress Tracking Module

Stage-based progress tracking for the OCR targets ingest. Supports Rich and
tqdm displays or no display at all.
"""

from ocr_targets.progress.core.tracker import (
    ProgressTracker,
    ProgressRenderer,
    ProgressMode,
    select_renderer,
)
from ocr_targets.progress.core.stage import ProgressStage, StageStatus, StageProgress
from ocr_targets.progress.display.rich_renderer import RichProgressRenderer
from ocr_targets.progress.display.tqdm_renderer import TqdmProgressRenderer
from ocr_targets.progress.stages.parse_stage import CsvParsingStage
from ocr_targets.progress.stages.row_stage import RowProcessingStage

__all__ = [
    'ProgressTracker',
    'ProgressRenderer',
    'ProgressMode',
    'select_renderer',
    'ProgressStage',
    'StageStatus',
    'StageProgress',
    'RichProgressRenderer',
    'TqdmProgressRenderer',
    'CsvParsingStage',
    'RowProcessingStage',
]
