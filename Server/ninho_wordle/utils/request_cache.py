"""
Request Cache

Deduplicates concurrent calls for the same key and keeps completed results
for the lifetime of the owner. No eviction; failures are not cached.
"""

import threading
from concurrent.futures import Future
from typing import Callable, Dict, Hashable, TypeVar

T = TypeVar('T')


class InFlightCache:
    """
    Thread-safe result cache with in-flight request sharing.

    The first caller for a key runs the loader; callers arriving while it is
    running wait on the same pending result instead of issuing a duplicate
    request.
    """

    def __init__(self):
        self._results: Dict[Hashable, object] = {}
        self._pending: Dict[Hashable, Future] = {}
        self._lock = threading.Lock()

    def get_or_load(self, key: Hashable, loader: Callable[[], T]) -> T:
        """
        Return the cached value for key, loading it at most once at a time.

        Args:
            key: Cache key (word or theme)
            loader: Zero-argument callable producing the value

        Returns:
            The cached or freshly loaded value

        Raises:
            Whatever the loader raised, for every caller sharing that attempt
        """
        with self._lock:
            if key in self._results:
                return self._results[key]

            pending = self._pending.get(key)
            owner = pending is None
            if owner:
                pending = Future()
                self._pending[key] = pending

        if not owner:
            return pending.result()

        try:
            value = loader()
        except BaseException as e:
            with self._lock:
                self._pending.pop(key, None)
            pending.set_exception(e)
            raise

        with self._lock:
            self._results[key] = value
            self._pending.pop(key, None)
        pending.set_result(value)
        return value

    def get(self, key: Hashable, default=None):
        with self._lock:
            return self._results.get(key, default)

    def in_flight(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._pending

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
