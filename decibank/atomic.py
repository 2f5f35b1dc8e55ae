# -*- coding: utf-8 -*-
"""
Atomic reference cell for immutable values.

`compare_and_set` publishes a new value only if the cell still holds the exact
object the caller read. Python has no user-level CAS instruction, so the check
and the store share a Lock that is held for nothing else: no arithmetic, no
I/O, no callbacks. Readers never take the lock.
"""

from __future__ import annotations

from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")


class AtomicReference(Generic[T]):
    def __init__(self, value: T):
        self._value = value
        self._lock = Lock()
        self._conflicts = 0

    def __repr__(self) -> str:
        return f"AtomicReference({self._value!r})"

    def get(self) -> T:
        # A single attribute load; never observes a half-written value.
        return self._value

    def compare_and_set(self, expected: T, new: T) -> bool:
        with self._lock:
            if self._value is not expected:
                self._conflicts += 1
                return False
            self._value = new
            return True

    @property
    def conflicts(self) -> int:
        """Failed compare_and_set calls so far."""
        return self._conflicts
