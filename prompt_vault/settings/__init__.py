from .base import (
    CATEGORY_KEY,
    SHEET_LINK_KEY,
    TAB_ID_KEY,
    InMemorySettingsStore,
    SettingsStore,
)
from .json_file import JSONFileSettingsStore

__all__ = [
    "SettingsStore",
    "InMemorySettingsStore",
    "JSONFileSettingsStore",
    "SHEET_LINK_KEY",
    "TAB_ID_KEY",
    "CATEGORY_KEY",
]
