from .tabs import (
    DEFAULT_TAB_IDENTIFIER,
    DEFAULT_TAB_NAME,
    STRATEGIES,
    default_tab,
    discover_tabs,
    probe_tabs,
    regex_strategy,
)
from .urls import to_csv_url, to_pubhtml_url

__all__ = [
    "DEFAULT_TAB_IDENTIFIER",
    "DEFAULT_TAB_NAME",
    "STRATEGIES",
    "default_tab",
    "discover_tabs",
    "probe_tabs",
    "regex_strategy",
    "to_csv_url",
    "to_pubhtml_url",
]
