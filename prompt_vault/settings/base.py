from abc import ABC, abstractmethod
from typing import Dict, Optional

# Keys persisted by SheetDataset
SHEET_LINK_KEY = "sheet_link"
TAB_ID_KEY = "tab_id"
CATEGORY_KEY = "category"


class SettingsStore(ABC):
    """
    Abstract Base Class for the key-value store holding user preferences.

    Values are strings. Reading a key that was never written returns None;
    implementations must not raise on reads.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Stores `value` under `key`, replacing any previous value.

        Raises:
            SettingsError: If the value could not be persisted.
        """
        pass


class InMemorySettingsStore(SettingsStore):
    """Settings kept in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value
