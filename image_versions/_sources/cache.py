"""Per-run cache of fetched source data."""

import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, TypeVar

from image_versions.logging_config import logger

T = TypeVar("T")


class FetchCache:
    """
    In-memory cache of fetched data keyed by source URL.

    Concurrent requests for the same URL share one in-flight fetch: the first
    caller performs it, the others wait for its result. A failed fetch is
    cached as well, so every caller sees the same failure for the rest of the
    run.

    A cache is meant to live for one program run; construct a new one per
    invocation instead of sharing it globally.

    Example:
        cache = FetchCache()
        data = cache.get_or_fetch(url, lambda: session.get(url).json())
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def get_or_fetch(self, key: str, fetch: Callable[[], T]) -> T:
        """
        Return the cached result for ``key``, fetching it on first use.

        Args:
            key: Cache key (the source URL)
            fetch: Callable performing the fetch

        Returns:
            The fetched data

        Raises:
            Exception: Whatever the fetch raised, for this and later callers
        """
        with self._lock:
            entry = self._entries.get(key)
            is_owner = entry is None
            if entry is None:
                entry = Future()
                self._entries[key] = entry

        if not is_owner:
            logger.debug(f"Cache hit: {key}")
            return entry.result()

        try:
            result = fetch()
        except Exception as e:
            entry.set_exception(e)
            raise
        entry.set_result(result)
        return result

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def snapshot(self) -> Dict[str, Any]:
        """Return the successfully fetched entries, for debugging."""
        with self._lock:
            entries = dict(self._entries)
        return {key: entry.result() for key, entry in entries.items() if entry.done() and not entry.exception()}
