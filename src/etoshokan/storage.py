from __future__ import annotations

import asyncio
import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote, unquote

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
]


class StorageError(RuntimeError):
    """Raised when a stored value cannot be read back."""


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self) -> list[str]: ...


_STORE_SUFFIX = ".json"
_TMP_PREFIX = ".tmp-"


def _key_filename(key: str) -> str:
    return quote(key, safe="") + _STORE_SUFFIX


class JsonFileStore:
    """
    Key/value store keeping one JSON file per key inside ``root``.

    Blocking file I/O runs in a worker thread so the store can be awaited from
    an event loop. Writes go through a temporary file and ``os.replace`` so a
    crash never leaves a half-written value behind.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, key: str) -> Path:
        return self.root / _key_filename(key)

    def _read(self, key: str) -> Any | None:
        path = self.path_for(key)
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read cached value for '{key}': {exc}") from exc
        return payload

    def _write(self, key: str, value: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(prefix=_TMP_PREFIX, suffix=_STORE_SUFFIX, dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle, ensure_ascii=False)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    def _keys(self) -> list[str]:
        if not self.root.is_dir():
            return []
        found: list[str] = []
        for path in sorted(self.root.glob(f"*{_STORE_SUFFIX}")):
            if path.name.startswith(_TMP_PREFIX):
                continue
            found.append(unquote(path.name[: -len(_STORE_SUFFIX)]))
        return found

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)

    async def keys(self) -> list[str]:
        return await asyncio.to_thread(self._keys)


class MemoryStore:
    """In-process store; values are deep-copied on the way in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> list[str]:
        return list(self._data)
