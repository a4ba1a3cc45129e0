"""
Throwable observer registries.

An ObserverRegistry holds callbacks that are told about every exception logged
at an enabled level. There is one registry per Log handle plus the process-wide
``global_observers`` registry, which is created on import and lives for the
whole process.
"""

import logging
import threading
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Observer = Callable[[BaseException], Any]


class ObserverRegistry:
    """Ordered set of observers.

    Membership uses ``==``, which is identity for plain functions and lambdas
    and (instance, function) for bound methods, so ``remove(obj.method)``
    finds the handler registered as ``add(obj.method)``.

    A single reentrant lock covers registration, removal and the full dispatch
    loop, so observers run while the lock is held. Dispatch iterates over a
    snapshot; changes made by an observer apply from the next dispatch.
    """

    def __init__(self):
        self._handlers: List[Observer] = []
        self._lock = threading.RLock()

    def add(self, handler: Observer) -> "ObserverRegistry":
        """Register a handler; adding one that is already present does nothing."""
        with self._lock:
            if not self._contains(handler):
                self._handlers.append(handler)
        return self

    def remove(self, handler: Observer) -> "ObserverRegistry":
        """Unregister a handler; unknown handlers are ignored."""
        with self._lock:
            self._handlers = [h for h in self._handlers if h != handler]
        return self

    def dispatch(self, value: BaseException) -> None:
        """Call every handler in registration order with ``value``.

        A handler that raises is logged and skipped; the remaining handlers
        still run.
        """
        with self._lock:
            for handler in list(self._handlers):
                try:
                    handler(value)
                except Exception:
                    logger.exception("Throwable observer %r failed", handler)

    __call__ = dispatch

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()

    def _contains(self, handler: Observer) -> bool:
        return handler in self._handlers

    def __contains__(self, handler: Observer) -> bool:
        with self._lock:
            return self._contains(handler)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


# Process-wide registry shared by every Log unless another one is injected
global_observers = ObserverRegistry()
