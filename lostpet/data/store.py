"""JSON-file key-value store with fire-and-forget writes."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStore:
    """Persist JSON-serializable values under string keys in one file.

    Reads happen once at construction; every ``set`` rewrites the file. A
    failed write is logged and ignored so the in-memory value stays
    authoritative for the running process.

    Args:
        path: Location of the JSON file. Parent directories are created on
            first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read store at %s, starting empty: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Store at %s is not a JSON object, starting empty", self.path)
            return {}
        return raw

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, seeding *key* with *default* if absent."""
        if key not in self._data:
            self.set(key, default)
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        """Store *value* and try to persist the whole store."""
        self._data[key] = copy.deepcopy(value)
        self._flush()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def keys(self) -> list[str]:
        return list(self._data)

    def _flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Failed to persist store to %s: %s", self.path, exc)
