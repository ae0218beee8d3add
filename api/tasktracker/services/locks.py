from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock


@dataclass
class _Entry:
    lock: Lock = field(default_factory=Lock)
    refs: int = 0


class UserLockRegistry:
    """One mutex per user id, created on demand and dropped when unused.

    Holders of different ids never contend on anything but the short registry
    lock used to look the entry up.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[int, _Entry] = {}

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                entry = _Entry()
                self._entries[user_id] = entry
            entry.refs += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._lock:
                entry.refs -= 1
                if entry.refs == 0:
                    self._entries.pop(user_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
