from __future__ import annotations

import threading
from typing import Hashable


class InFlightRegistry:
    """Writes currently running, shared by every request of one app.

    A key is held from ``acquire`` until ``release``; a second ``acquire`` of
    the same key in the meantime is refused.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._keys: set[Hashable] = set()

    def acquire(self, key: Hashable) -> bool:
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def release(self, key: Hashable) -> None:
        with self._lock:
            self._keys.discard(key)
