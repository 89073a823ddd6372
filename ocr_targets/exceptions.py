"""
OCR Targets Ingest - Exceptions

Centralized exception hierarchy for the ingest pipeline.
"""


class OcrTargetsError(Exception):
    """Base exception for all OCR targets operations."""
    pass


class CsvParseError(OcrTargetsError):
    """Exception for CSV tokenization errors.

    The bundled tokenizer is permissive and never raises this. It exists so
    that stricter tokenizers can signal malformed input, which the workflow
    reports as a PARSE_ERROR summary instead of propagating.
    """
    pass


class RowProcessingError(OcrTargetsError):
    """Exception for a failure while processing a single row.

    Raised when:
    - The OCR/enrichment backend cannot handle the record
    - The record is missing data the backend needs
    """
    pass


class SinkError(OcrTargetsError):
    """Exception for row or summary sink failures.

    Raised when:
    - A dataset item or the summary cannot be written
    - The payload cannot be serialized to JSON
    """
    pass


class InputError(OcrTargetsError):
    """Exception for unusable run input.

    Raised when:
    - The input JSON file cannot be read
    - The input JSON is not an object
    - The CSV file given on the command line does not exist
    """
    pass
