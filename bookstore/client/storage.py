"""
Local Storage

A small persistent key/value store for client state, kept in one JSON
file. Values are strings, as in a browser's localStorage; callers
serialize their own data.

Reads never fail: a missing or unreadable file behaves like an empty
store. Writes replace the file atomically.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """Key/value strings persisted to a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: not a JSON object")
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
