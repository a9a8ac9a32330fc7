# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Session slots — storage for the single pending capture of a session.

Two adapters implement :class:`SessionSlot`:

- :class:`ContextSlot` keeps the capture in a ``ContextVar``, so every
  thread and every asyncio task sees a private slot.
- :class:`LocalSlot` keeps the capture on the slot object behind a lock,
  for explicit session handles shared between callers.
"""

from __future__ import annotations

import itertools
import threading
from contextvars import ContextVar
from typing import Protocol, runtime_checkable

from fluentlambda.capture.types import CapturedMethod

_slot_ids = itertools.count()


@runtime_checkable
class SessionSlot(Protocol):
    """Holds at most one :class:`CapturedMethod`."""

    def record(self, method: CapturedMethod) -> bool:
        """Store *method* if the slot is empty.

        Returns False when the slot was already occupied; the slot is
        cleared in that case and *method* is not stored.
        """
        ...

    def take(self) -> CapturedMethod | None:
        """Return the pending capture (or None) and leave the slot empty."""
        ...

    def peek(self) -> CapturedMethod | None: ...

    def clear(self) -> None: ...


class ContextSlot:
    """Slot scoped to the current ``contextvars`` context.

    Each slot allocates its own ``ContextVar``; create one per long-lived
    session rather than one per capture.
    """

    def __init__(self, name: str | None = None) -> None:
        self._var: ContextVar[CapturedMethod | None] = ContextVar(
            name or f"fluentlambda_capture_{next(_slot_ids)}", default=None
        )

    def record(self, method: CapturedMethod) -> bool:
        if self._var.get() is not None:
            self._var.set(None)
            return False
        self._var.set(method)
        return True

    def take(self) -> CapturedMethod | None:
        method = self._var.get()
        self._var.set(None)
        return method

    def peek(self) -> CapturedMethod | None:
        return self._var.get()

    def clear(self) -> None:
        self._var.set(None)


class LocalSlot:
    """Slot stored on the object itself; read-modify-clear runs under a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._method: CapturedMethod | None = None

    def record(self, method: CapturedMethod) -> bool:
        with self._lock:
            if self._method is not None:
                self._method = None
                return False
            self._method = method
            return True

    def take(self) -> CapturedMethod | None:
        with self._lock:
            method, self._method = self._method, None
            return method

    def peek(self) -> CapturedMethod | None:
        return self._method

    def clear(self) -> None:
        with self._lock:
            self._method = None
