#!/usr/bin/env python3
"""
OCR Targets Ingest - Main Entry Point

Runs one ingest of the global OCR targets CSV:
1. Load the CSV payload and row cap from the input JSON (or CLI overrides)
2. Parse the CSV and emit one output record per row to the local dataset
3. Store the run summary as OUTPUT in the local key-value store
"""

import sys
import logging
from typing import List, Optional

from ocr_targets.cli.config import parse_arguments, resolve_actor_input
from ocr_targets.exceptions import InputError, SinkError
from ocr_targets.logging import LoggingManager
from ocr_targets.progress import ProgressTracker
from ocr_targets.sinks import DatasetRowSink, KeyValueSummarySink, dataset_dir, key_value_store_dir
from ocr_targets.workflows import WorkflowConfig, run_ocr_targets_workflow

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - parse config and execute the ingest workflow.

    Returns:
        Exit code: 0 for a completed run, 1 when the run ended without
        processing (no CSV or parse error), 2 for fatal errors
    """
    args = parse_arguments(argv)

    logging_manager = LoggingManager.get_instance()
    logging_manager.setup(args.log_file, console_level=args.console_log_level)

    try:
        logger.info("OCR targets ingest started")

        actor_input = resolve_actor_input(args)
        logger.info(
            f"Input summary: csv_provided={bool(actor_input.ocr_targets_csv)}, "
            f"csv_length={len(actor_input.ocr_targets_csv or '')}, "
            f"max_files={actor_input.max_files}"
        )

        row_sink = DatasetRowSink(dataset_dir(args.storage_dir))
        summary_sink = KeyValueSummarySink(key_value_store_dir(args.storage_dir))
        config = WorkflowConfig(
            emission=args.emission_mode,
            field_mapping=args.field_mapping_mode
        )

        progress_tracker = ProgressTracker(mode=args.progress_mode, logging_manager=logging_manager)

        with progress_tracker:
            result = run_ocr_targets_workflow(
                actor_input.ocr_targets_csv,
                actor_input.max_files,
                row_sink=row_sink,
                summary_sink=summary_sink,
                config=config,
                progress_tracker=progress_tracker
            )
            progress_tracker.display_completion_summary(result.summary.to_dict())

        logger.info(f"Dataset items written: {row_sink.item_count}")
        logger.info(f"Summary stored at: {summary_sink.path}")
        logger.info("OCR targets ingest finished")

        return 0 if result.summary.ok else 1

    except InputError as e:
        logger.error(f"Invalid input: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2

    except SinkError as e:
        logger.error(f"Failed to store output: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2

    except KeyboardInterrupt:
        logger.warning("\nRun interrupted by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.error(f"OCR targets ingest - fatal error: {e}")
        logger.error("Please check the log file for detailed error information")
        logger.debug("Full error details:", exc_info=True)
        return 2

    finally:
        logging_manager.cleanup()


if __name__ == '__main__':
    sys.exit(main())
