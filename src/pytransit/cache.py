"""Time-to-live cache over a pluggable key-value store.

The cache only decides validity and owns the (de)serialization boundary;
where bytes live is up to the :class:`KeyValueStore` handed in by the host.
"""

from __future__ import annotations

import contextlib
import hashlib
import logging
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class KeyValueStore(Protocol):
    """String key-value storage owned by the host environment."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store; contents vanish with the object."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStore:
    """One file per key under *directory*.

    File names are a hash of the key so arbitrary keys are safe on disk.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self._dir / f"{digest}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            _logger.warning("Cache read failed for %s: %s", key, exc)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class CacheEntry(BaseModel, Generic[T]):
    """A cached value and when it was fetched."""

    value: T
    fetched_at_ms: int


class TTLCache(Generic[T]):
    """Keyed cache whose entries expire *ttl* seconds after ``set``.

    Parameters
    ----------
    store : KeyValueStore
        Backing storage.
    value_type : type
        Type of cached values; used to validate payloads read back.
    ttl : float
        Entry lifetime in seconds.  An entry is valid iff
        ``now - fetched_at < ttl``.
    namespace : str
        Prefix applied to every key in the store.
    clock : callable
        Returns the current epoch time in milliseconds.  Injected by tests.
    """

    def __init__(
        self,
        store: KeyValueStore,
        value_type: Any,
        ttl: float,
        *,
        namespace: str = "pytransit",
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._store = store
        self._entry_type: type[CacheEntry[T]] = CacheEntry[value_type]  # type: ignore[valid-type]
        self._ttl_ms = int(ttl * 1000)
        self._namespace = namespace
        self._clock = clock

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    def _load(self, key: str) -> CacheEntry[T] | None:
        payload = self._store.get(self._key(key))
        if payload is None:
            return None
        try:
            return self._entry_type.model_validate_json(payload)
        except (ValidationError, ValueError):
            _logger.warning("Ignoring corrupt cache entry for %s", key)
            return None

    def _fresh(self, entry: CacheEntry[T]) -> bool:
        return self._clock() - entry.fetched_at_ms < self._ttl_ms

    def get(self, key: str) -> T | None:
        """Return the cached value, or ``None`` on a miss or expired entry."""
        entry = self._load(key)
        if entry is None or not self._fresh(entry):
            return None
        return entry.value

    def set(self, key: str, value: T) -> None:
        """Store *value*, overwriting any entry and stamping the current time."""
        entry = self._entry_type(value=value, fetched_at_ms=self._clock())
        self._store.set(self._key(key), entry.model_dump_json())

    def is_valid(self, key: str) -> bool:
        entry = self._load(key)
        return entry is not None and self._fresh(entry)

    def invalidate(self, key: str) -> None:
        self._store.remove(self._key(key))

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value or await *fetch*, caching its result.

        Errors from *fetch* propagate; nothing is cached in that case.  A
        store that fails to write is logged and the fetched value is still
        returned.
        """
        cached = self.get(key)
        if cached is not None:
            _logger.debug("Cache hit for %s", key)
            return cached
        _logger.debug("Cache miss for %s", key)
        value = await fetch()
        try:
            self.set(key, value)
        except OSError:
            _logger.warning("Cache write failed for %s", key, exc_info=True)
        return value
