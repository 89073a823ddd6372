"""
Rich Progress Renderer

Live progress display using the Rich library: one bar per stage plus a
details table, and a summary panel once the run finishes.
"""

import logging
import time
from threading import RLock
from typing import Any, Dict, Optional

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.progress import (
    Progress, TaskID, BarColumn, TextColumn,
    TimeElapsedColumn, SpinnerColumn, MofNCompleteColumn
)
from rich.table import Table
from rich.text import Text

from ocr_targets.progress.core.tracker import ProgressRenderer
from ocr_targets.progress.core.stage import StageStatus, StageProgress

logger = logging.getLogger(__name__)

REFRESH_PER_SECOND = 4

STATUS_COLORS = {
    StageStatus.PENDING: "dim",
    StageStatus.RUNNING: "blue",
    StageStatus.COMPLETED: "green",
    StageStatus.FAILED: "red",
    StageStatus.SKIPPED: "yellow",
}

STATUS_ICONS = {
    StageStatus.PENDING: "…",
    StageStatus.RUNNING: "▶",
    StageStatus.COMPLETED: "✓",
    StageStatus.FAILED: "✗",
    StageStatus.SKIPPED: "⊙",
}


class RichProgressRenderer(ProgressRenderer):
    """Rich-based progress renderer with a per-stage details table."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """
        Initialize Rich progress renderer.

        Args:
            console: Optional Rich console instance
        """
        self.console = console or Console()
        self._lock = RLock()
        self._live: Optional[Live] = None
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console
        )
        self._tasks: Dict[str, TaskID] = {}
        self._stage_data: Dict[str, StageProgress] = {}
        self._start_time = time.time()

    def start(self) -> None:
        """Start the Rich live display."""
        with self._lock:
            if self._live is not None:
                return

            self._start_time = time.time()
            self._live = Live(
                self._create_layout(),
                console=self.console,
                refresh_per_second=REFRESH_PER_SECOND,
                transient=False
            )
            self._live.start()

    def stop(self) -> None:
        """Stop the Rich live display."""
        with self._lock:
            if self._live is not None:
                self._live.update(self._create_layout())
                self._live.stop()
                self._live = None

    def update_stage(self, stage_name: str, stage_progress: StageProgress) -> None:
        """Update the bar and details row for a stage."""
        with self._lock:
            self._stage_data[stage_name] = stage_progress
            description = self._get_stage_description(stage_name, stage_progress)
            total = stage_progress.total if stage_progress.total else None

            if stage_name not in self._tasks:
                self._tasks[stage_name] = self._progress.add_task(
                    description=description,
                    total=total,
                    completed=stage_progress.current
                )
            else:
                self._progress.update(
                    self._tasks[stage_name],
                    description=description,
                    completed=stage_progress.current,
                    total=total
                )

            if self._live is not None:
                self._live.update(self._create_layout())

    def _get_stage_description(self, stage_name: str, stage_progress: StageProgress) -> str:
        color = STATUS_COLORS.get(stage_progress.status, "white")
        icon = STATUS_ICONS.get(stage_progress.status, "•")
        display_name = stage_name.replace('_', ' ').title()
        return f"[{color}]{icon} {display_name}[/{color}]"

    def _create_layout(self) -> Table:
        progress_panel = Panel(
            self._progress,
            title="OCR Targets Ingest",
            border_style="blue",
            padding=(1, 2)
        )

        details_table = Table(show_header=True, header_style="bold")
        details_table.add_column("Stage", style="cyan", no_wrap=True)
        details_table.add_column("Status")
        details_table.add_column("Message", style="dim")

        for stage_name, stage_progress in self._stage_data.items():
            color = STATUS_COLORS.get(stage_progress.status, "white")
            message = stage_progress.message or "—"
            if stage_progress.error:
                message += f" | Error: {stage_progress.error}"
            details_table.add_row(
                stage_name.replace('_', ' ').title(),
                f"[{color}]{stage_progress.status.value.title()}[/{color}]",
                message
            )

        elapsed = Text(f"Elapsed: {time.time() - self._start_time:.1f}s", style="dim")

        layout = Table.grid(padding=1)
        layout.add_column()
        layout.add_row(progress_panel)
        layout.add_row(details_table)
        layout.add_row(elapsed)
        return layout

    def display_completion_summary(self, summary: Dict[str, Any]) -> None:
        """Display the run summary as a panel."""
        with self._lock:
            summary_table = Table.grid(padding=(0, 2))
            summary_table.add_column(style="cyan bold")
            summary_table.add_column()

            summary_table.add_row("Outcome:", str(summary.get('reason', '')))
            summary_table.add_row("Total rows:", f"{summary.get('total_rows', 0)}")
            summary_table.add_row("Processed rows:", f"{summary.get('processed_rows', 0)}")
            summary_table.add_row("Completed:", f"{summary.get('processed_count', 0)}")
            summary_table.add_row("Errors:", f"{summary.get('error_count', 0)}")

            if summary.get('ok'):
                title = Text("✓ RUN COMPLETE", style="bold green")
                border_style = "green"
            else:
                title = Text("✗ RUN ENDED EARLY", style="bold red")
                border_style = "red"

            self.console.print()
            self.console.print(Panel(summary_table, title=title, border_style=border_style, padding=(1, 2)))
            self.console.print()
