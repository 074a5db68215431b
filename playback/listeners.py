"""
listeners.py — Observer registry
================================
Handlers are called synchronously in registration order.  A handler that
raises is logged and skipped; the remaining handlers still run and the
error never reaches the code that triggered the notification.
"""

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by `Listeners.add`; `cancel()` unregisters."""

    def __init__(self, registry: "Listeners", handler: Callable):
        self._registry = registry
        self._handler  = handler

    def cancel(self) -> None:
        self._registry.remove(self._handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class Listeners(Generic[T]):

    def __init__(self, name: str = "listeners"):
        self._name = name
        self._handlers: List[Callable[[T], None]] = []

    def add(self, handler: Callable[[T], None]) -> Subscription:
        if handler is None or not callable(handler):
            raise ValueError("listener must be callable")
        self._handlers.append(handler)
        return Subscription(self, handler)

    def remove(self, handler: Callable[[T], None]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def notify(self, value: T) -> None:
        # iterate a copy: handlers may unsubscribe while being called
        for handler in list(self._handlers):
            try:
                handler(value)
            except Exception:
                logger.exception("%s handler %r failed", self._name, handler)

    def __len__(self) -> int:
        return len(self._handlers)
