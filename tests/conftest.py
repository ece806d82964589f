import asyncio
from typing import Dict, List, Optional, Union

import pytest

from prompt_vault.exceptions import TransportError
from prompt_vault.fetchers.base import SheetFetcher
from prompt_vault.settings import InMemorySettingsStore

BASE_LINK = "https://docs.google.com/spreadsheets/d/e/2PACX-test/pub?output=csv"
LISTING_URL = "https://docs.google.com/spreadsheets/d/e/2PACX-test/pubhtml"


def csv_url(gid: str) -> str:
    return f"{BASE_LINK}&gid={gid}"


class FakeFetcher(SheetFetcher):
    """
    Serves canned responses by URL.

    A response may be text or a TransportError to raise. URLs listed in
    `gates` wait on their asyncio.Event before answering.
    """

    def __init__(self, responses: Optional[Dict[str, Union[str, Exception]]] = None):
        self.responses: Dict[str, Union[str, Exception]] = dict(responses or {})
        self.gates: Dict[str, asyncio.Event] = {}
        self.requested: List[str] = []

    async def fetch_text(self, url: str) -> str:
        self.requested.append(url)
        gate = self.gates.get(url)
        if gate is not None:
            await gate.wait()
        response = self.responses.get(url)
        if response is None:
            raise TransportError("HTTP 404: Not Found", url=url, status_code=404)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Provides an empty FakeFetcher; tests fill in `responses`."""
    return FakeFetcher()


@pytest.fixture
def settings() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def listing_html():
    """Builds a listing document in the published-HTML tab bar markup."""

    def _listing_html(tabs: List[tuple], title: str = "Prompts") -> str:
        items = "".join(
            f'<li id="sheet-button-{gid}"><a href="#">{name}</a></li>'
            for gid, name in tabs
        )
        return (
            f"<html><head><title>{title}</title></head>"
            f'<body><ul id="sheet-menu">{items}</ul></body></html>'
        )

    return _listing_html
