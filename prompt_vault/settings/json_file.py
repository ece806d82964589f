import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

import aiofiles
import aiofiles.os

from prompt_vault.exceptions import SettingsError
from prompt_vault.settings.base import SettingsStore

log = logging.getLogger(__name__)


class JSONFileSettingsStore(SettingsStore):
    """
    Settings persisted as a flat JSON object in a local file.

    The file is read once, on first access. Every `set` writes the whole object
    to a temporary file next to the target and then replaces the target, so
    readers never see a partial file. Writes from one store are serialized, and
    a value becomes visible to `get` only once it has been written.

    A missing, unreadable or corrupt file is treated as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._values: Optional[Dict[str, str]] = None
        self._write_lock = asyncio.Lock()

    async def _load(self) -> Dict[str, str]:
        if self._values is not None:
            return self._values

        values: Dict[str, str] = {}
        if self.path.is_file():
            try:
                async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                    raw = json.loads(await f.read())
                if isinstance(raw, dict):
                    values = {str(k): str(v) for k, v in raw.items() if v is not None}
                else:
                    log.warning(
                        f"Ignoring settings file {self.path}: not a JSON object"
                    )
            except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
                log.warning(f"Ignoring unreadable settings file {self.path}: {e}")
        # A concurrent set may have stored values while the file was being read
        if self._values is None:
            self._values = values
        return self._values

    async def _write(self, values: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        os.close(fd)
        try:
            async with aiofiles.open(temp_name, "w", encoding="utf-8") as f:
                await f.write(json.dumps(values, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(temp_name, self.path)
        except OSError:
            try:
                await aiofiles.os.remove(temp_name)
            except OSError as cleanup_error:
                log.debug(f"Could not remove {temp_name}: {cleanup_error}")
            raise

    async def get(self, key: str) -> Optional[str]:
        values = await self._load()
        return values.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._write_lock:
            values = dict(await self._load())
            values[key] = value
            try:
                await self._write(values)
            except OSError as e:
                log.error(
                    f"Failed to write settings file {self.path}: {e}", exc_info=True
                )
                raise SettingsError(
                    f"Failed to write settings file {self.path}: {e}"
                ) from e
            self._values = values
        log.debug(f"Saved setting '{key}' to {self.path}")
