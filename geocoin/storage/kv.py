"""String key-value stores backing player persistence."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable, Mapping, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal durable string store.

    ``update`` and ``discard`` apply several keys as one write.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def update(self, entries: Mapping[str, str]) -> None: ...

    def remove(self, key: str) -> None: ...

    def discard(self, keys: Iterable[str]) -> None: ...

    def clear(self) -> None: ...


class InMemoryStore:
    """Dict-backed store; contents are lost when the process exits."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def update(self, entries: Mapping[str, str]) -> None:
        self._data.update(entries)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def discard(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class JsonFileStore:
    """Store persisted as a single JSON object file.

    The whole file is rewritten on every mutation through a temporary file
    and ``os.replace``, so a crash never leaves a half-written store.
    """

    __slots__ = ("_path", "_data")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring store %s: top level is not an object", self._path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def update(self, entries: Mapping[str, str]) -> None:
        self._data.update(entries)
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def discard(self, keys: Iterable[str]) -> None:
        removed = [self._data.pop(key, None) for key in keys]
        if any(v is not None for v in removed):
            self._flush()

    def clear(self) -> None:
        self._data.clear()
        self._flush()


def open_store(path: str | Path | None) -> KeyValueStore:
    """Return a file-backed store for *path*, or an in-memory one when None."""
    if path is None:
        return InMemoryStore()
    return JsonFileStore(path)
