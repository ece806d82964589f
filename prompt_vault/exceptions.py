from typing import Optional


class PromptVaultError(Exception):
    """Base class for all prompt_vault errors."""


class TransportError(PromptVaultError):
    """
    Raised when a listing or CSV export could not be fetched, either because
    the server answered with a non-success status or the request failed.
    """

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class SettingsError(PromptVaultError):
    """Raised when a settings store cannot persist a value."""
