"""Synchronous key-value store backed by JSON files, used by the local backend."""

import json
import logging
import os
from typing import Any

from inventory_pos.common.exceptions.custom_exceptions import DatabaseError

logger = logging.getLogger(__name__)


class LocalJsonStore:
    """Stores one JSON document per key under a directory (``<dir>/<key>.json``)."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = base_dir

    def _path_for(self, key: str) -> str:
        return os.path.join(self.base_dir, f"{key}.json")

    def load(self, key: str, default: Any) -> Any:
        """Returns the stored value for key, or default when nothing was saved yet."""
        path = self._path_for(key)
        if not os.path.exists(path):
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise DatabaseError(f"Error decoding local store '{key}' at {path}", original_exception=e)
        except OSError as e:
            raise DatabaseError(f"Error reading local store '{key}' at {path}", original_exception=e)

    def save(self, key: str, data: Any) -> None:
        """Writes value for key; the previous file is replaced only after a complete write."""
        path = self._path_for(key)
        tmp_path = f"{path}.tmp"
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            raise DatabaseError(f"Error saving local store '{key}' at {path}", original_exception=e)
        logger.debug(f"Local store '{key}' saved to {path}")
