from __future__ import annotations
"""At-most-one in-flight submission per form instance.

A form instance is identified by an operation name plus an optional entity id
(e.g. ``('role.update', 7)``). A second submission of the same instance while
the first is still awaiting the remote API is rejected, not queued.
"""
import threading
from contextlib import contextmanager
from typing import Hashable, Optional, Set, Tuple

from admin_panel.errors import DuplicateSubmissionError


class InFlightGuard:
    def __init__(self):
        self._lock = threading.Lock()
        self._active: Set[Tuple[str, Optional[Hashable]]] = set()

    def is_pending(self, operation: str, entity_id: Optional[Hashable] = None) -> bool:
        with self._lock:
            return (operation, entity_id) in self._active

    @contextmanager
    def submit(self, operation: str, entity_id: Optional[Hashable] = None):
        key = (operation, entity_id)
        with self._lock:
            if key in self._active:
                raise DuplicateSubmissionError(f'{operation} already in progress')
            self._active.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(key)

__all__ = ['InFlightGuard']
