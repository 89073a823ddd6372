"""
Progress Display Components

Contains renderers for interactive and plain terminals.
"""

from ocr_targets.progress.display.rich_renderer import RichProgressRenderer
from ocr_targets.progress.display.tqdm_renderer import TqdmProgressRenderer

__all__ = [
    'RichProgressRenderer',
    'TqdmProgressRenderer',
]
