"""
Key-value store backing every DWOMS collection.

Values are kept as JSON text under string keys, the same shape browser local
storage has. ``get`` always hands back a freshly decoded copy, so callers can
mutate what they read without touching the stored value until they ``set``
it again.

Missing or undecodable values fall back to the caller's default. A backing
file that cannot be read is treated as an empty store.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from ..core.config import settings

logger = logging.getLogger(__name__)


class LocalStorage:
    def __init__(self, path: Optional[str] = None):
        self.path = path or None
        self._items: Dict[str, str] = {}
        if self.path:
            self._items = self._load_file(self.path)

    # ── raw access ──────────────────────────────────────────────────────────

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, raw: str) -> None:
        self._items[key] = raw
        self._flush()

    def remove(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._items = {}
        self._flush()

    def keys(self) -> List[str]:
        return list(self._items.keys())

    # ── JSON access ─────────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._items.get(key)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.debug(f"[Storage] Ignoring undecodable value under '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, default=str))

    # ── file backing ────────────────────────────────────────────────────────

    @staticmethod
    def _load_file(path: str) -> Dict[str, str]:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.debug(f"[Storage] Starting empty, could not read {path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _flush(self) -> None:
        if not self.path:
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".dwoms-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._items, f)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


storage = LocalStorage(None if settings.storage_in_memory else settings.DWOMS_STORAGE_PATH)
