"""
Stage-Specific Progress Implementations

Contains specialized progress stages for each workflow phase.
"""

from ocr_targets.progress.stages.parse_stage import CsvParsingStage
from ocr_targets.progress.stages.row_stage import RowProcessingStage

__all__ = [
    'CsvParsingStage',
    'RowProcessingStage',
]
