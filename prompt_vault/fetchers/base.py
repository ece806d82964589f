from abc import ABC, abstractmethod


class SheetFetcher(ABC):
    """
    Abstract Base Class for the transport used to reach a published spreadsheet.

    A fetcher only performs GET requests and hands back response text. URL
    derivation and parsing stay with the caller, so any HTTP stack (or a
    canned fixture in tests) can serve as the transport.
    """

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """
        Fetches the body of `url` as text, bypassing any cache.

        Args:
            url: Absolute URL of the listing document or CSV export.

        Returns:
            The decoded response body.

        Raises:
            TransportError: If the server answers with a non-success status or
                            the request fails before a response is received.
        """
        pass

    async def aclose(self) -> None:
        """Releases transport resources. The default implementation holds none."""
        return None

    async def __aenter__(self) -> "SheetFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
