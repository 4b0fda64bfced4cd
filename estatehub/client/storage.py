"""Local key-value persistence for client-only state.

Mirrors the browser ``localStorage`` contract: string keys, string
values, synchronous reads and writes.  The store keeps three keys:

* ``favorites``       JSON array of property ids
* ``recentlyViewed``  JSON array of property ids, most recent first
* ``isAdmin``         ``"true"`` or absent
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"
RECENTLY_VIEWED_KEY = "recentlyViewed"
IS_ADMIN_KEY = "isAdmin"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryStorage:
    """Process-local storage; nothing survives the interpreter."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class JsonFileStorage:
    """Storage persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary sibling and
    ``os.replace`` so a crash mid-write never leaves a truncated file.
    A missing or unreadable file is treated as empty.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path).expanduser()
        self._items: Dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            logger.warning("Cannot read local storage at %s", self._path)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt local storage at %s; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected local storage layout at %s", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=".storage-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._items, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._write()

    def clear(self) -> None:
        self._items.clear()
        self._write()


def load_id_list(storage: KeyValueStorage, key: str) -> List[str]:
    """Decode a JSON array of ids stored under *key*.

    Anything that is not a JSON array reads as an empty list; repeated
    ids keep their first position only.
    """
    raw = storage.get_item(key)
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring corrupt %r entry in local storage", key)
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring non-list %r entry in local storage", key)
        return []
    return list(dict.fromkeys(str(item) for item in value))


def save_id_list(storage: KeyValueStorage, key: str, ids: List[str]) -> None:
    storage.set_item(key, json.dumps(ids))
