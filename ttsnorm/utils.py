"""
Utility helpers for ttsnorm.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyValue(Generic[T]):
    """
    Build a value on first use, exactly once, even under concurrent access.

    Usage::

        _REGISTRY = LazyValue(build_registry)
        registry = _REGISTRY.get()
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None
        self._built = False

    def get(self) -> T:
        """Return the value, building it on the first call."""
        if not self._built:
            with self._lock:
                if not self._built:
                    self._value = self._factory()
                    self._built = True
        return self._value  # type: ignore[return-value]

    @property
    def is_built(self) -> bool:
        return self._built


def parse_key_value(item: str, separator: str = "=") -> tuple[str, str]:
    """
    Split a ``KEY=VALUE`` command-line item.

    Raises:
        ValueError: If the separator is missing or the key is empty
    """
    key, sep, value = item.partition(separator)
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected KEY{separator}VALUE, got '{item}'")
    return key, value.strip()
