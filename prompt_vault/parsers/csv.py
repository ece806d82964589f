import logging
from typing import List

from prompt_vault.types import Row

log = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ","


def parse_csv(text: str) -> List[Row]:
    """
    Parse CSV export text into rows of string fields.

    Quoted fields may contain delimiters and line breaks, and a doubled quote
    inside a quoted field stands for one literal quote. Carriage returns outside
    quotes are dropped so CRLF input parses like LF input. An unterminated quote
    is closed at end of input; malformed text never raises.

    Args:
        text: The raw export text.

    Returns:
        The rows in input order. Rows may have different lengths.
    """
    rows: List[Row] = []
    row: Row = []
    field: List[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < length and text[i + 1] == QUOTE:
                    field.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(ch)
        elif ch == QUOTE:
            in_quotes = True
        elif ch == DELIMITER:
            row.append("".join(field))
            field = []
        elif ch == "\n":
            row.append("".join(field))
            field = []
            rows.append(row)
            row = []
        elif ch != "\r":
            field.append(ch)
        i += 1

    # Input without a trailing newline still has a last row to flush
    if field or row:
        row.append("".join(field))
        rows.append(row)

    log.debug(f"Parsed {len(rows)} CSV rows from {length} characters")
    return rows

