"""
Canonical Field Mapping

Maps header-keyed CSV records onto the fixed set of attachment fields used
by the OCR stage. Mapping is positional: the N-th canonical field takes the
value of the N-th CSV column, whatever its header is called.
"""

import logging
from enum import Enum
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)

# Column order of the global OCR targets export
CANONICAL_FIELDS: List[str] = [
    'Invoice_ID',
    'Line_item_ID',
    'Attachment_ID',
    'Master_attachment_key',
    'File_name',
    'Drop_box_file_name',
    'Path_lower',
    'Xero_attachment_download_URL',
    'Likely_tracking_horse',
    'Xero_type',
    'Xero_year',
    'Target_type',
]


class FieldMapping(Enum):
    """How source records are shaped before processing."""
    IDENTITY = "identity"      # Keep the header-keyed record as is
    CANONICAL = "canonical"    # Remap columns to CANONICAL_FIELDS by position


def remap_canonical(record: Dict[str, str], headers: Sequence[str]) -> Dict[str, str]:
    """
    Build a canonical record from a header-keyed record by column position.

    Args:
        record: Header-keyed record from matrix_to_records()
        headers: Header list the record was built from

    Returns:
        Dict with exactly the CANONICAL_FIELDS keys, missing columns as ''

    Example:
        >>> remap_canonical({'col1': 'INV-1', 'col2': 'LI-9'}, ['col1', 'col2'])['Line_item_ID']
        'LI-9'
    """
    canonical = {}
    for idx, field_name in enumerate(CANONICAL_FIELDS):
        if idx < len(headers):
            canonical[field_name] = record.get(headers[idx], '')
        else:
            canonical[field_name] = ''
    return canonical


def apply_field_mapping(
    record: Dict[str, str],
    headers: Sequence[str],
    mapping: FieldMapping = FieldMapping.CANONICAL
) -> Dict[str, str]:
    """
    Shape a record according to the configured field mapping.

    Identity records keep their own keys, so an input column named like a
    row status field (ocr_status, ocr_result, ocr_error) is replaced in the
    output record.
    """
    if mapping == FieldMapping.CANONICAL:
        return remap_canonical(record, headers)
    return dict(record)
