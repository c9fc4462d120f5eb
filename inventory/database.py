import asyncio
import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from . import config
from .errors import StoreCorrupted
from .logger import get_logger

# This file holds the dataset stores and the write lock.

log = get_logger("database")

Dataset = Dict[str, Any]

_LOCKS: Dict[str, asyncio.Lock] = {}


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def write_lock() -> asyncio.Lock:
    """Process-wide lock held across every load/mutate/save cycle."""
    return _get_lock("store")


def empty_dataset() -> Dataset:
    return {"products": [], "transactions": []}


def _normalize(data: Dataset) -> Dataset:
    data.setdefault("products", [])
    data.setdefault("transactions", [])
    return data


class Store:
    """Reads and writes the whole dataset at once."""

    def load(self) -> Dataset:
        raise NotImplementedError

    def save(self, data: Dataset) -> None:
        raise NotImplementedError


class MemoryStore(Store):
    def __init__(self, data: Optional[Dataset] = None):
        self._data = copy.deepcopy(data) if data is not None else empty_dataset()

    def load(self) -> Dataset:
        return _normalize(copy.deepcopy(self._data))

    def save(self, data: Dataset) -> None:
        self._data = copy.deepcopy(data)


class JsonFileStore(Store):
    """
    One JSON document holding `products` and `transactions`.

    A missing file is a fresh install and loads as an empty dataset. A corrupt
    file is logged as an error and, when `strict` is set, raised as
    StoreCorrupted; otherwise it also loads as an empty dataset.
    """

    def __init__(self, path: Union[str, Path], strict: bool = False):
        self.path = Path(path)
        self.strict = strict

    def load(self) -> Dataset:
        if not self.path.exists():
            log.debug("No store file at %s yet, starting empty", self.path)
            return empty_dataset()
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            return self._corrupt(f"cannot read store file {self.path}: {e}")
        if not isinstance(data, dict):
            return self._corrupt(f"store file {self.path} is not a JSON object")
        data = _normalize(data)
        for key in ("products", "transactions"):
            records = data[key]
            if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
                return self._corrupt(f"store file {self.path}: `{key}` is not a list of objects")
        return data

    def save(self, data: Dataset) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)

    def _corrupt(self, reason: str) -> Dataset:
        log.error("Corrupt store: %s", reason)
        if self.strict:
            raise StoreCorrupted("Store file is corrupt")
        return empty_dataset()


_STORE: Optional[Store] = None


def get_store() -> Store:
    """FastAPI dependency returning the configured store."""
    global _STORE
    if _STORE is None:
        _STORE = JsonFileStore(config.db_path(), strict=config.strict_store())
    return _STORE
