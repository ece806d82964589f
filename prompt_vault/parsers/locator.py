import logging
from typing import FrozenSet, Sequence

from prompt_vault.types import Row

log = logging.getLogger(__name__)

# Only this many leading rows are inspected for banners and headers.
SCAN_LIMIT = 40

CATEGORY_HEADER_LABELS: FrozenSet[str] = frozenset(
    {"kategori", "category", "type", "label", "navn", "title", "overskrift"}
)
CONTENT_HEADER_LABELS: FrozenSet[str] = frozenset({"prompt", "tekst", "text"})


def _cell(rows: Sequence[Row], row_index: int, column: int) -> str:
    if row_index >= len(rows):
        return ""
    row = rows[row_index]
    return row[column] if column < len(row) else ""


def find_data_start(rows: Sequence[Row]) -> int:
    """
    Find the index of the first row holding real category/prompt data.

    Rows are inspected from the top, at most `SCAN_LIMIT` of them:

    - rows whose first two cells are blank are skipped;
    - a row whose column A is a known category label, or whose column B is a
      known content label, is a header and data starts on the next row;
    - otherwise the row itself starts the data when its own column B, or the
      column B of either of the next two rows, is non-blank.

    The last rule can return a banner row with an empty column B when content
    follows right after it.

    Returns:
        The data start index, or 0 when no row in the window qualifies.
    """
    for r in range(min(SCAN_LIMIT, len(rows))):
        col_a = _cell(rows, r, 0).strip().lower()
        col_b = _cell(rows, r, 1).strip().lower()
        if not col_a and not col_b:
            continue

        if col_a in CATEGORY_HEADER_LABELS or col_b in CONTENT_HEADER_LABELS:
            log.debug(f"Header row detected at {r}, data starts at {r + 1}")
            return r + 1

        if (
            col_b
            or _cell(rows, r + 1, 1).strip()
            or _cell(rows, r + 2, 1).strip()
        ):
            log.debug(f"Data starts at row {r}")
            return r

    log.debug("No banner or header detected, data starts at row 0")
    return 0

