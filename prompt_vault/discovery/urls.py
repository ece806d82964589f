import logging
import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

log = logging.getLogger(__name__)

TAB_PARAM = "gid"
FORMAT_PARAM = "output"
CSV_FORMAT = "csv"

_PUB_QUERY_RE = re.compile(r"/pub\?[^#]*$")
_GID_PARAM_RE = re.compile(r"[?&]gid=\d+")


def to_pubhtml_url(link: str) -> str:
    """
    Derive the published HTML listing URL from a "Publish to the web" link.

    `https://.../pub?output=csv` becomes `https://.../pubhtml`. Links of any
    other shape are kept, minus a `gid` parameter.
    """
    html_url = _PUB_QUERY_RE.sub("/pubhtml", link)
    html_url = _GID_PARAM_RE.sub("", html_url, count=1)
    log.debug(f"Derived listing URL {html_url} from {link}")
    return html_url


def to_csv_url(base_link: str, identifier: str) -> str:
    """
    Derive the CSV export URL of one tab.

    Every existing `gid` parameter is dropped, `output=csv` is enforced and the
    tab identifier is appended as the last `gid` parameter.

    Args:
        base_link: The published link the user supplied.
        identifier: The tab's gid.

    Returns:
        The tab's data location.
    """
    parts = urlsplit(base_link)
    params = []
    has_format = False
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == TAB_PARAM:
            continue
        if key == FORMAT_PARAM:
            if has_format:
                continue
            value = CSV_FORMAT
            has_format = True
        params.append((key, value))
    if not has_format:
        params.append((FORMAT_PARAM, CSV_FORMAT))
    params.append((TAB_PARAM, identifier))
    return urlunsplit(parts._replace(query=urlencode(params)))
