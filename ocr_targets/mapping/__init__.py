"""Record field mapping"""
from ocr_targets.mapping.canonical import (
    CANONICAL_FIELDS,
    FieldMapping,
    remap_canonical,
    apply_field_mapping,
)

__all__ = ["CANONICAL_FIELDS", "FieldMapping", "remap_canonical", "apply_field_mapping"]
