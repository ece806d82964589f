import logging
from typing import Any, Dict, Optional

import httpx
from charset_normalizer import detect as charset_detect

from prompt_vault.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from prompt_vault.exceptions import TransportError
from prompt_vault.fetchers.base import SheetFetcher

log = logging.getLogger(__name__)

# Limit on how much of an error body ends up in messages
ERROR_BODY_LIMIT = 1024


def detect_encoding(content: bytes) -> Optional[str]:
    """Guess the encoding of a response body that declares no charset."""
    if not content:
        return "utf-8"
    return charset_detect(content).get("encoding")


class HttpSheetFetcher(SheetFetcher):
    """
    Fetches published spreadsheet documents over HTTP with httpx.

    Every request asks intermediaries not to serve cached content, so each
    discovery or data load reflects the latest published version. No retries
    are attempted; a failure is raised once as `TransportError`.

    Allows providing a custom `httpx.AsyncClient` instance for advanced configuration,
    otherwise creates a default client from the timeout and user agent parameters.
    """

    _client: httpx.AsyncClient
    _owns_client: bool

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs: Any,
    ):
        """
        Initializes the fetcher.

        Args:
            timeout: Request timeout in seconds. Used only if 'client' is not provided.
            user_agent: User-Agent header sent with every request.
            client: An optional pre-configured `httpx.AsyncClient` instance. If provided,
                    `timeout` is ignored and the client is not closed by `aclose`.
            **kwargs: Additional keyword arguments passed to the default `httpx.AsyncClient`
                      constructor if `client` is not provided.
        """
        self._headers = self._prepare_default_headers(user_agent)

        if client:
            if not isinstance(client, httpx.AsyncClient):
                raise TypeError(
                    f"Expected client to be an instance of httpx.AsyncClient, got {type(client)}"
                )
            self._client = client
            self._owns_client = False
            log.debug("Using provided httpx.AsyncClient instance.")
        else:
            effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
            self._client = httpx.AsyncClient(
                timeout=effective_timeout,
                follow_redirects=True,
                default_encoding=detect_encoding,
                **kwargs,
            )
            self._owns_client = True
            log.debug(
                f"Created default httpx.AsyncClient: timeout={effective_timeout}s"
            )

    def _prepare_default_headers(self, user_agent: str) -> Dict[str, str]:
        return {
            "User-Agent": user_agent,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    async def fetch_text(self, url: str) -> str:
        log.info(f"Fetching {url}")
        try:
            response = await self._client.get(url, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            reason = e.response.reason_phrase
            error_detail = ""
            try:
                content = e.response.text[:ERROR_BODY_LIMIT]
                if content:
                    error_detail = f" - Response Body: {content}"
            except Exception:
                pass  # Body may be undecodable
            log.warning(f"Failed to fetch {url}: HTTP {status_code}{error_detail}")
            raise TransportError(
                f"HTTP {status_code}: {reason}", url=url, status_code=status_code
            ) from e
        except httpx.RequestError as e:
            log.warning(f"Error while fetching {url}: {e}")
            raise TransportError(f"Request failed: {e}", url=url) from e

        text = response.text
        log.debug(f"Fetched {len(text)} characters from {url}")
        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
