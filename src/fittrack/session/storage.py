"""
fittrack.session.storage

Local key/value persistence for auth artifacts.

Responsibilities:
- Provide a session-scoped in-memory store and a durable JSON-file store.
- Purge provider-namespaced keys without touching unrelated application data.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from fittrack.observability.logging import get_logger
from fittrack.session.contracts import KeyValueStorage

log = get_logger(__name__)


class MemoryStorage:
    """
    Session-scoped storage; contents live as long as the process.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def keys(self) -> list[str]:
        return list(self._items)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStorage:
    """
    Durable storage backed by a single JSON object on disk.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except ValueError as e:
            # Unreadable cache: set it aside so reads see an empty store and the next write
            # starts a clean file.
            corrupt = self._path.with_suffix(self._path.suffix + ".corrupt")
            os.replace(self._path, corrupt)
            log.warning(
                "storage_file_corrupt",
                path=str(self._path),
                moved_to=str(corrupt),
                error=str(e),
            )
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _dump(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, sort_keys=True), encoding="utf-8")
        # Atomic replace so a crash mid-write never leaves a truncated credential file.
        os.replace(tmp, self._path)

    def keys(self) -> list[str]:
        return list(self._load())

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)


def purge_namespace(storage: KeyValueStorage, prefix: str) -> list[str]:
    if not prefix:
        # An empty prefix would match every key.
        raise ValueError("namespace prefix must not be empty")
    doomed = [key for key in storage.keys() if key.startswith(prefix)]
    for key in doomed:
        storage.remove_item(key)
    return doomed
