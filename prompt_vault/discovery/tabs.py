import html as html_lib
import logging
import re
from typing import Callable, List, Optional, Sequence, Set, Tuple

from prompt_vault.discovery.urls import to_csv_url
from prompt_vault.exceptions import TransportError
from prompt_vault.fetchers.base import SheetFetcher
from prompt_vault.types import Tab

log = logging.getLogger(__name__)

# (identifier, display name) pairs in document order
TabMatch = Tuple[str, str]
Strategy = Callable[[str], List[TabMatch]]

DEFAULT_TAB_IDENTIFIER = "0"
DEFAULT_TAB_NAME = "Sheet 1"

# Candidate gids tried by `probe_tabs`
PROBE_IDENTIFIERS: Tuple[str, ...] = ("0", "1", "2", "3", "4", "5")
# A probed export shorter than this is treated as empty
PROBE_MIN_LENGTH = 10
PROBE_ERROR_MARKERS: Tuple[str, ...] = ("Error", "not found")

_TITLE_RE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
_TITLE_PART_RE = re.compile(r"[^-]+")
# Title pieces this short are separators or initials, not names
_TITLE_MIN_LENGTH = 3


def regex_strategy(
    pattern: str, flags: int = 0, *, name_first: bool = False
) -> Strategy:
    """
    Build a strategy that collects every match of `pattern` in a document.

    The pattern has two groups, the identifier and the name, in that order
    unless `name_first` is set.
    """
    compiled: re.Pattern = re.compile(pattern, flags)
    id_group, name_group = (2, 1) if name_first else (1, 2)

    def strategy(document: str) -> List[TabMatch]:
        return [
            (m.group(id_group), m.group(name_group))
            for m in compiled.finditer(document)
        ]

    strategy.__name__ = f"regex_strategy({pattern!r})"
    return strategy


# Ordered from current sheet markup to legacy and generic markup.
STRATEGIES: Tuple[Strategy, ...] = (
    regex_strategy(
        r'<div[^>]*data-gid="(\d+)"[^>]*>.*?<span[^>]*class="[^"]*sheet-button-name[^"]*"[^>]*>([^<]+)</span>',
        re.DOTALL,
    ),
    regex_strategy(
        r'<div[^>]*aria-controls="sheet-tab-(\d+)"[^>]*aria-label="([^"]+)"'
    ),
    regex_strategy(
        r'data-gid="(\d+)"[^>]*>.*?class="docs-sheet-tab-name"[^>]*>([^<]+)<',
        re.DOTALL,
    ),
    regex_strategy(r'<li[^>]*id="sheet-button-(\d+)"[^>]*>\s*<a[^>]*>([^<]+)</a>'),
    regex_strategy(
        r'items\.push\(\{name:\s*"([^"]+)",\s*pageUrl:\s*"[^"]*",\s*gid:\s*"(\d+)"',
        name_first=True,
    ),
    regex_strategy(r"gid=(\d+)[^>]*>([^<]+)<"),
    regex_strategy(r'"gid":(\d+)[^}]*"name":"([^"]+)"'),
)


def _clean_name(raw: str) -> str:
    return html_lib.unescape(raw).strip()


def _first_match(
    document: str, strategies: Sequence[Strategy]
) -> Tuple[Optional[Strategy], List[TabMatch]]:
    for strategy in strategies:
        try:
            matches = strategy(document)
        except Exception as e:
            log.warning(f"Tab strategy {strategy.__name__} failed: {e}")
            continue
        if matches:
            return strategy, matches
    return None, []


def _title_fallback(document: str, base_link: str) -> Optional[Tab]:
    title_match = _TITLE_RE.search(document)
    if not title_match:
        return None
    for part in _TITLE_PART_RE.findall(title_match.group(1)):
        name = _clean_name(part)
        if len(name) >= _TITLE_MIN_LENGTH:
            return Tab(DEFAULT_TAB_IDENTIFIER, name, base_link)
    return None


def default_tab(base_link: str) -> Tab:
    """The single tab used when a listing names no tabs at all."""
    return Tab(DEFAULT_TAB_IDENTIFIER, DEFAULT_TAB_NAME, base_link)


def discover_tabs(
    document: Optional[str],
    base_link: str,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> List[Tab]:
    """
    Extract the tabs listed in a published spreadsheet's HTML view.

    Strategies are tried in order and the first one that finds anything is
    used alone; results from different strategies are never merged. Within
    that strategy, repeated identifiers keep their first occurrence and tabs
    are returned in document order.

    When no strategy matches, a single tab named after the document title is
    returned, and failing that a single default tab. Both point at `base_link`
    unchanged.

    Args:
        document: The listing HTML. None or empty input is accepted.
        base_link: The published link tab data locations are derived from.
        strategies: Extraction strategies in priority order.

    Returns:
        At least one tab.
    """
    document = document or ""
    strategy, matches = _first_match(document, strategies)

    tabs: List[Tab] = []
    seen: Set[str] = set()
    for identifier, raw_name in matches:
        if identifier in seen:
            continue
        seen.add(identifier)
        tabs.append(
            Tab(identifier, _clean_name(raw_name), to_csv_url(base_link, identifier))
        )

    if tabs:
        log.debug(f"Discovered {len(tabs)} tabs using {strategy.__name__}")
        return tabs

    title_tab = _title_fallback(document, base_link)
    if title_tab:
        log.warning(
            f"No tabs found in listing, using document title '{title_tab.name}'"
        )
        return [title_tab]

    log.warning("No tabs found in listing, using a single default tab")
    return [default_tab(base_link)]


async def probe_tabs(
    fetcher: SheetFetcher,
    base_link: str,
    identifiers: Sequence[str] = PROBE_IDENTIFIERS,
) -> List[Tab]:
    """
    Find tabs by requesting the CSV export of commonly used gids.

    A candidate is kept when its export returns more than `PROBE_MIN_LENGTH`
    characters and does not look like an error page. Candidates are probed one
    after another; a candidate whose request fails is skipped.

    Returns:
        The tabs that answered, named "Sheet 1", "Sheet 2", ... in probe order.
        Empty when none answered.
    """
    tabs: List[Tab] = []
    for identifier in identifiers:
        url = to_csv_url(base_link, identifier)
        try:
            text = await fetcher.fetch_text(url)
        except TransportError as e:
            log.debug(f"Probe for gid {identifier} failed: {e}")
            continue
        if len(text) > PROBE_MIN_LENGTH and not any(
            marker in text for marker in PROBE_ERROR_MARKERS
        ):
            tabs.append(Tab(identifier, f"Sheet {len(tabs) + 1}", url))
            log.info(f"Found working gid {identifier}")
    return tabs
