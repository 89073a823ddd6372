"""CSV parsing"""
from ocr_targets.csv.tokenizer import parse_csv
from ocr_targets.csv.records import CsvRecordSet, Record, matrix_to_records, is_blank_row

__all__ = ["parse_csv", "CsvRecordSet", "Record", "matrix_to_records", "is_blank_row"]
