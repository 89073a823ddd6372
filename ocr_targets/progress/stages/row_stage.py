"""
Row Processing Stage

Progress tracking for the per-row processing loop.
"""

from ocr_targets.progress.core.stage import ProgressStage


class RowProcessingStage(ProgressStage):
    """
    Progress stage for row processing.

    Tracks:
    - Rows selected after the cap is applied
    - Rows completed and rows that errored
    """

    def __init__(self) -> None:
        super().__init__(
            name="row_processing",
            description="Processing OCR target rows"
        )

    def start_rows(self, total_rows: int, limit: int) -> None:
        self.start(total=limit, message=f"Processing {limit} of {total_rows} row(s)")
        self.update_progress(details={"total_rows": total_rows, "limit": limit})

    def update_row(self, completed_rows: int, processed_count: int, error_count: int) -> None:
        self.update_progress(
            current=completed_rows,
            message=f"{completed_rows}/{self.progress.total} row(s) | {error_count} error(s)",
            details={
                "processed_count": processed_count,
                "error_count": error_count,
            }
        )

    def complete_rows(self, processed_count: int, error_count: int) -> None:
        self.complete(f"{processed_count} row(s) completed, {error_count} error(s)")
