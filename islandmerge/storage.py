"""Key/value storage kept as JSON files in a data directory."""

from __future__ import annotations

import glob
import json
import shutil
from pathlib import Path
from typing import Any

_SUFFIX = ".json"


class StorageError(Exception):
    """Raised when stored data cannot be provided."""


class KeyNotFoundError(StorageError, KeyError):
    """Raised when a key has no stored value."""

    def __init__(self, key: str = "") -> None:
        super().__init__("key not found")
        self.key = key

    def __str__(self) -> str:
        return "key not found"


class LocalStorage:
    """Stores each key as ``<key>.json`` under ``data_dir``."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        if data_dir is None:
            data_dir = Path.home() / ".island-merge"
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}{_SUFFIX}"

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` as JSON under ``key``."""
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        self._path(key).write_text(text, encoding="utf-8")

    def get(self, key: str) -> Any:
        """Return the decoded value for ``key``."""
        try:
            text = self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise KeyNotFoundError(key) from None
        return json.loads(text)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def clear(self) -> None:
        """Remove every stored key."""
        shutil.rmtree(self.data_dir, ignore_errors=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def keys(self, prefix: str = "") -> list[str]:
        """Sorted keys starting with ``prefix``."""
        pattern = glob.escape(prefix) + "*" + _SUFFIX
        return sorted(path.name[: -len(_SUFFIX)] for path in self.data_dir.glob(pattern))