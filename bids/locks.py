"""
Purpose: Keyed mutual exclusion for check-then-act sequences.
What it does:
Hands out one lock per key so `request_quote` for ("L1", "T1") serialises with
every other writer of that pair while other pairs proceed in parallel.

Same shape as a distributed lock manager (`with locks.lock(key): ...`), so a
Redis/DB advisory-lock implementation can be dropped in for multi-process
deployments.

Rule:
An entry lives only while someone holds or waits on its key; the last holder
out removes it, so the map stays as small as the set of pairs in flight.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List


class KeyedLockManager:

    def __init__(self):
        self._guard = threading.Lock()
        #key -> [lock, number of holders and waiters]
        self._locks: Dict[Hashable, List] = {}

    def _acquire_entry(self, key: Hashable) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: Hashable) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def lock(self, key: Hashable) -> Iterator[None]:
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)
