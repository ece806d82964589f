"""Define the configurable parameters for prompt_vault."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# ENV VARIABLES NAMES
ENV_SHEET_LINK = "PROMPT_VAULT_SHEET_LINK"
ENV_SETTINGS_PATH = "PROMPT_VAULT_SETTINGS_PATH"
ENV_HTTP_TIMEOUT = "PROMPT_VAULT_HTTP_TIMEOUT"
ENV_USER_AGENT = "PROMPT_VAULT_USER_AGENT"
ENV_PROBE_TABS = "PROMPT_VAULT_PROBE_TABS"
# DEFAULT VALUES
DEFAULT_LINK = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vRTD5myRZpckG-JW5TmkGgvAoyH38rEWIi-g0ha7iQfyDHUDxBAdVp3N9_YUAeKLFE7ErQNuHnopAi0"
    "/pub?output=csv"
)
DEFAULT_SETTINGS_PATH = Path.home() / ".prompt_vault" / "settings.json"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(kw_only=True)
class Configuration:
    """The configuration for prompt_vault."""

    default_link: str = DEFAULT_LINK
    settings_path: Path = DEFAULT_SETTINGS_PATH
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    # Probe common gids when the listing yields no tabs.
    probe_when_empty: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Configuration:
        """Create a Configuration from environment variables, keeping defaults."""
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(ENV_HTTP_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(
                    f"{ENV_HTTP_TIMEOUT} must be a number of seconds, got {raw_timeout!r}"
                ) from e
            if timeout <= 0:
                raise ValueError(f"{ENV_HTTP_TIMEOUT} must be positive, got {timeout}")

        settings_path = env.get(ENV_SETTINGS_PATH)
        return cls(
            default_link=env.get(ENV_SHEET_LINK) or DEFAULT_LINK,
            settings_path=(
                Path(settings_path).expanduser()
                if settings_path
                else DEFAULT_SETTINGS_PATH
            ),
            timeout=timeout,
            user_agent=env.get(ENV_USER_AGENT) or DEFAULT_USER_AGENT,
            probe_when_empty=env.get(ENV_PROBE_TABS, "").strip().lower()
            in _TRUE_VALUES,
        )
