import logging
from typing import Callable, List, Optional

from prompt_vault.config import Configuration
from prompt_vault.discovery import discover_tabs, probe_tabs, to_pubhtml_url
from prompt_vault.exceptions import SettingsError, TransportError
from prompt_vault.fetchers.base import SheetFetcher
from prompt_vault.filtering import filter_prompts, list_categories
from prompt_vault.parsers import find_data_start, parse_csv
from prompt_vault.settings import (
    CATEGORY_KEY,
    SHEET_LINK_KEY,
    TAB_ID_KEY,
    InMemorySettingsStore,
    SettingsStore,
)
from prompt_vault.types import Dataset, FilterState, LoadStage, Row, Tab

log = logging.getLogger(__name__)

ErrorCallback = Callable[[LoadStage, TransportError], None]


class SheetDataset:
    """
    Drives tab discovery and row loading for one published spreadsheet link.

    A user action runs at most two fetches, one after the other: the tab
    listing, then the selected tab's CSV export. Each stage tags its request
    with a sequence number and drops the response when a newer request of the
    same stage has started since, so a slow response never overwrites newer
    state. A tab listing that replaces the tab list also supersedes in-flight
    row loads; a failed or stale listing leaves them running.

    Transport failures are logged, stored in `last_error` and reported once to
    `on_error`; the previously loaded tabs and dataset stay in place.

    The link, the selected tab and the category filter are written to the
    settings store whenever they change. Use `SheetDataset.open` to restore
    them from a store.
    """

    def __init__(
        self,
        fetcher: SheetFetcher,
        settings: Optional[SettingsStore] = None,
        configuration: Optional[Configuration] = None,
        on_error: Optional[ErrorCallback] = None,
        *,
        link: Optional[str] = None,
        tab_id: str = "",
        category: str = "",
    ):
        self.configuration = configuration or Configuration()
        self._fetcher = fetcher
        self._settings = settings if settings is not None else InMemorySettingsStore()
        self._on_error = on_error

        self.link: str = link or self.configuration.default_link
        self.tabs: List[Tab] = []
        self.active_tab_id: str = tab_id
        self.dataset: Optional[Dataset] = None
        self.filter_state = FilterState(category=category)
        self.last_error: Optional[TransportError] = None

        self._tabs_sequence = 0
        self._rows_sequence = 0

    @classmethod
    async def open(
        cls,
        fetcher: SheetFetcher,
        settings: SettingsStore,
        configuration: Optional[Configuration] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> "SheetDataset":
        """
        Create a SheetDataset with the link, tab and category last saved in `settings`.

        Missing values fall back to the configured default link and empty selections.
        Nothing is fetched until `load_tabs` is called.
        """
        link = await settings.get(SHEET_LINK_KEY)
        tab_id = await settings.get(TAB_ID_KEY)
        category = await settings.get(CATEGORY_KEY)
        log.debug(
            f"Restored settings: link={link!r}, tab_id={tab_id!r}, category={category!r}"
        )
        return cls(
            fetcher,
            settings,
            configuration,
            on_error,
            link=link or None,
            tab_id=tab_id or "",
            category=category or "",
        )

    @property
    def active_tab(self) -> Optional[Tab]:
        for tab in self.tabs:
            if tab.identifier == self.active_tab_id:
                return tab
        return None

    @property
    def rows(self) -> List[Row]:
        return self.dataset.rows if self.dataset else []

    @property
    def categories(self) -> List[str]:
        return list_categories(self.rows)

    @property
    def visible_prompts(self) -> List[str]:
        return filter_prompts(self.rows, self.filter_state)

    async def _persist(self, key: str, value: str) -> None:
        try:
            await self._settings.set(key, value)
        except SettingsError as e:
            log.warning(f"Could not save setting '{key}': {e}")

    def _report(self, stage: LoadStage, error: TransportError) -> None:
        self.last_error = error
        log.error(f"Failed to load {stage.value} from {error.url}: {error}")
        if self._on_error:
            self._on_error(stage, error)

    async def set_link(self, link: str) -> None:
        self.link = link.strip()
        await self._persist(SHEET_LINK_KEY, self.link)

    async def set_category(self, category: str) -> None:
        self.filter_state.category = category
        await self._persist(CATEGORY_KEY, category)

    def set_query(self, query: str) -> None:
        self.filter_state.query = query

    def _is_fallback(self, tabs: List[Tab]) -> bool:
        return len(tabs) == 1 and tabs[0].data_location == self.link

    async def load_tabs(self) -> List[Tab]:
        """
        Fetch the tab listing for the current link and load the selected tab.

        The previously selected tab stays selected when the new listing still
        contains it, otherwise the first tab is selected.

        Returns:
            The current tab list. Unchanged when the listing could not be fetched.
        """
        self._tabs_sequence += 1
        sequence = self._tabs_sequence
        link = self.link
        listing_url = to_pubhtml_url(link)

        log.info(f"Loading tabs from {listing_url}")
        try:
            document = await self._fetcher.fetch_text(listing_url)
        except TransportError as e:
            if sequence == self._tabs_sequence:
                self._report(LoadStage.TABS, e)
            return self.tabs

        tabs = discover_tabs(document, link)
        if self.configuration.probe_when_empty and self._is_fallback(tabs):
            probed = await probe_tabs(self._fetcher, link)
            if probed:
                tabs = probed

        if sequence != self._tabs_sequence:
            log.warning(f"Discarding stale tab listing from {listing_url}")
            return self.tabs

        # Row loads started before this listing belong to the old tab list
        self._rows_sequence += 1
        self.tabs = tabs
        self.dataset = None
        self.last_error = None
        log.info(f"Loaded {len(tabs)} tabs: {[tab.name for tab in tabs]}")

        selected = self.active_tab or tabs[0]
        await self._activate(selected)
        return self.tabs

    async def select_tab(self, identifier: str) -> Optional[Dataset]:
        """Make the tab with `identifier` active and load its rows."""
        tab = next((t for t in self.tabs if t.identifier == identifier), None)
        if tab is None:
            log.warning(f"Ignoring selection of unknown tab '{identifier}'")
            return self.dataset
        await self._activate(tab)
        return self.dataset

    async def _activate(self, tab: Tab) -> None:
        self.active_tab_id = tab.identifier
        await self._persist(TAB_ID_KEY, tab.identifier)
        await self.load_rows()

    async def load_rows(self) -> Optional[Dataset]:
        """
        Fetch and parse the active tab's CSV export, replacing the current dataset.

        Leading banner and header rows are dropped. The category filter is kept
        only when the new rows still contain that category; the query is cleared.

        Returns:
            The current dataset. Unchanged when there is no active tab or the
            export could not be fetched.
        """
        tab = self.active_tab
        if tab is None:
            return self.dataset

        self._rows_sequence += 1
        sequence = self._rows_sequence

        log.info(f"Loading rows for tab '{tab.name}' ({tab.identifier})")
        try:
            text = await self._fetcher.fetch_text(tab.data_location)
        except TransportError as e:
            if sequence == self._rows_sequence:
                self._report(LoadStage.ROWS, e)
            return self.dataset

        if sequence != self._rows_sequence:
            log.warning(
                f"Discarding stale rows for tab '{tab.name}' ({tab.identifier})"
            )
            return self.dataset

        parsed = parse_csv(text)
        start = find_data_start(parsed)
        self.dataset = Dataset(tab=tab, rows=parsed[start:], data_start=start)
        self.last_error = None
        log.info(
            f"Loaded {len(self.dataset.rows)} rows for '{tab.name}', data starts at row {start}"
        )

        category = self.filter_state.category
        if category and category not in self.categories:
            await self.set_category("")
        self.filter_state.query = ""
        return self.dataset
