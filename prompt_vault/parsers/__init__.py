from .csv import parse_csv
from .locator import CATEGORY_HEADER_LABELS, CONTENT_HEADER_LABELS, find_data_start

__all__ = [
    "parse_csv",
    "find_data_start",
    "CATEGORY_HEADER_LABELS",
    "CONTENT_HEADER_LABELS",
]
