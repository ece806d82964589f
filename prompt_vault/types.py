from dataclasses import dataclass, field
from enum import Enum
from typing import List, TypeAlias

# A parsed CSV row. Rows in one dataset may differ in length.
Row: TypeAlias = List[str]


@dataclass(frozen=True)
class Tab:
    """
    One sheet tab of a published spreadsheet.

    Attributes:
        identifier: The sheet `gid`. Unique within a single discovery result.
        name: Display name of the tab.
        data_location: URL returning the tab's CSV export.
    """

    identifier: str
    name: str
    data_location: str


@dataclass(frozen=True)
class Dataset:
    """
    Rows loaded for exactly one tab.

    Attributes:
        tab: The tab the rows were fetched from.
        rows: Parsed rows, starting at the first data row.
        data_start: Index of the first data row in the raw parsed rows.
    """

    tab: Tab
    rows: List[Row] = field(default_factory=list)
    data_start: int = 0


@dataclass
class FilterState:
    """Category and free-text filter applied to a dataset's prompts."""

    category: str = ""
    query: str = ""


class LoadStage(str, Enum):
    """The network stage a failure happened in."""

    TABS = "tabs"
    ROWS = "rows"
