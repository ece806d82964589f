"""Load published Google Sheets tabs as filterable prompt lists."""

from .config import Configuration
from .dataset import SheetDataset
from .discovery import discover_tabs, probe_tabs, to_csv_url, to_pubhtml_url
from .exceptions import PromptVaultError, SettingsError, TransportError
from .fetchers import HttpSheetFetcher, SheetFetcher
from .filtering import filter_prompts, list_categories
from .parsers import find_data_start, parse_csv
from .settings import InMemorySettingsStore, JSONFileSettingsStore, SettingsStore
from .types import Dataset, FilterState, LoadStage, Row, Tab

__all__ = [
    "Configuration",
    "SheetDataset",
    "discover_tabs",
    "probe_tabs",
    "to_csv_url",
    "to_pubhtml_url",
    "PromptVaultError",
    "SettingsError",
    "TransportError",
    "HttpSheetFetcher",
    "SheetFetcher",
    "filter_prompts",
    "list_categories",
    "find_data_start",
    "parse_csv",
    "InMemorySettingsStore",
    "JSONFileSettingsStore",
    "SettingsStore",
    "Dataset",
    "FilterState",
    "LoadStage",
    "Row",
    "Tab",
]
