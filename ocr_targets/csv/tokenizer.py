"""
CSV Tokenizer Module

Small permissive CSV tokenizer for OCR target payloads. Handles quoted
fields, embedded commas, embedded newlines and doubled quotes. Never raises
on malformed input: an unterminated quote simply runs to end of input.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ','
NEWLINE = '\n'
CARRIAGE_RETURN = '\r'


@dataclass
class _ScanState:
    """Mutable state of a single tokenizer scan."""
    rows: List[List[str]] = field(default_factory=list)
    row: List[str] = field(default_factory=list)
    buffer: List[str] = field(default_factory=list)
    in_quotes: bool = False

    def end_field(self) -> None:
        self.row.append(''.join(self.buffer))
        self.buffer = []

    def end_row(self) -> None:
        self.end_field()
        self.rows.append(self.row)
        self.row = []


def parse_csv(text: Optional[str]) -> List[List[str]]:
    """
    Tokenize CSV text into a matrix of string cells.

    Rows may be ragged; no cell-count consistency is enforced. A trailing
    row consisting of a single empty field (text ending in a newline, or
    empty text) is dropped.

    Args:
        text: Raw CSV text. None is treated as an empty string.

    Returns:
        List of rows, each a list of cell strings

    Example:
        >>> parse_csv('a,"b,c"\\n1,2\\n')
        [['a', 'b,c'], ['1', '2']]
    """
    text = '' if text is None else str(text)
    state = _ScanState()

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if state.in_quotes:
            if char == QUOTE:
                if i + 1 < length and text[i + 1] == QUOTE:
                    state.buffer.append(QUOTE)
                    i += 1
                else:
                    state.in_quotes = False
            else:
                state.buffer.append(char)
        elif char == QUOTE:
            state.in_quotes = True
        elif char == DELIMITER:
            state.end_field()
        elif char == NEWLINE:
            state.end_row()
        elif char == CARRIAGE_RETURN:
            pass
        else:
            state.buffer.append(char)

        i += 1

    if state.in_quotes:
        logger.debug("Unterminated quoted field ran to end of input")

    # Flush the last field and keep the row unless it is a lone empty field
    state.end_field()
    if len(state.row) > 1 or (len(state.row) == 1 and state.row[0] != ''):
        state.rows.append(state.row)

    logger.debug(f"Tokenized {length} character(s) into {len(state.rows)} row(s)")
    return state.rows
