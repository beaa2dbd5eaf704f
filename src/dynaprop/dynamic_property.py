"""Dynamic properties: named, mutable configuration cells.

A DynamicProperty holds the current raw string value for one name. There is
exactly one instance per name for the lifetime of the process; lookups are
idempotent. Whatever refreshes configuration (a poller, an admin endpoint,
a test) pushes new values in through update_value() or the module-level
helpers, and every registered callback fires before the update returns.

Thread safety: reads take no lock. Callbacks are kept in a copy-on-write
tuple, so firing iterates a stable snapshot while other threads register.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable, Mapping

from dynaprop import _anchor

logger = logging.getLogger("dynaprop.dynamic_property")

Callback = Callable[[], None]

_TRUE_VALUES = frozenset({"true", "t", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"false", "f", "no", "n", "off"})

_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_LONG_MIN, _LONG_MAX = -(2**63), 2**63 - 1


class DynamicProperty:
    """A single named configuration value with change callbacks."""

    __slots__ = ("name", "_value", "_changed_ms", "_callbacks", "_lock")

    def __init__(self, name: str) -> None:
        self.name = name
        self._value: str | None = None
        self._changed_ms = 0
        self._callbacks: tuple[Callback, ...] = ()
        # Reentrant: a collected wrapper removes its hook from a weakref
        # callback, which can run while this thread already holds the lock.
        self._lock = threading.RLock()

    @classmethod
    def get_instance(cls, name: str) -> DynamicProperty:
        """Look up the property for name, creating it on first use."""
        prop = _anchor.handles.get(name)
        if prop is not None:
            return prop
        with _anchor.handles_lock:
            prop = _anchor.handles.get(name)
            if prop is None:
                prop = cls(name)
                _anchor.handles[name] = prop
                logger.debug("Created dynamic property %r", name)
        return prop

    def get_name(self) -> str:
        return self.name

    # --- Reads ---

    def get_string(self, default: str | None = None) -> str | None:
        value = self._value
        return default if value is None else value

    def get_integer(self, default: int | None = None) -> int | None:
        """32-bit signed integer; out-of-range values fall back to default."""
        return self._parse_ranged(_INT_MIN, _INT_MAX, default)

    def get_long(self, default: int | None = None) -> int | None:
        """64-bit signed integer; out-of-range values fall back to default."""
        return self._parse_ranged(_LONG_MIN, _LONG_MAX, default)

    def get_float(self, default: float | None = None) -> float | None:
        return self._parse(float, default)

    def get_double(self, default: float | None = None) -> float | None:
        return self._parse(float, default)

    def get_boolean(self, default: bool | None = None) -> bool | None:
        value = self._value
        if value is None:
            return default
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        return default

    def _parse(self, convert, default):
        value = self._value
        if value is None:
            return default
        try:
            return convert(value.strip())
        except ValueError:
            return default

    def _parse_ranged(self, low, high, default):
        value = self._parse(int, None)
        if value is None or not low <= value <= high:
            return default
        return value

    def get_changed_timestamp(self) -> int:
        """Milliseconds since the epoch of the last change, or 0 if never changed."""
        return self._changed_ms

    # --- Callbacks ---

    def add_callback(self, callback: Callback) -> None:
        """Append a callback. Duplicates are kept; each fires once per change."""
        with self._lock:
            self._callbacks = self._callbacks + (callback,)

    def remove_callback(self, callback: Callback) -> bool:
        """Remove one registration of callback. Returns False if it was not present."""
        with self._lock:
            callbacks = list(self._callbacks)
            try:
                callbacks.remove(callback)
            except ValueError:
                return False
            self._callbacks = tuple(callbacks)
            return True

    def get_callbacks(self) -> tuple[Callback, ...]:
        """Snapshot of the registered callbacks."""
        return self._callbacks

    # --- Writes ---

    def update_value(self, value: object) -> bool:
        """Set the raw value (None clears it). Notifies only if it changed."""
        new = None if value is None else str(value)
        with self._lock:
            if new == self._value:
                return False
            self._value = new
            self._changed_ms = int(time.time() * 1000)
        self._notify()
        return True

    def _notify(self) -> None:
        """Run every callback in the current snapshot. A failing callback
        is logged and does not stop the rest."""
        for callback in self._callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Callback for property %r failed", self.name)

    def __repr__(self) -> str:
        return f"DynamicProperty({self.name!r}, {self._value!r})"


def set_property(name: str, value: object) -> bool:
    """Set the raw value of the named property."""
    return DynamicProperty.get_instance(name).update_value(value)


def clear_property(name: str) -> bool:
    """Remove the value of the named property so readers fall back to defaults."""
    return DynamicProperty.get_instance(name).update_value(None)


def update_properties(values: Mapping[str, object]) -> list[str]:
    """Apply a batch of new raw values. Returns the names that changed."""
    changed = [name for name, value in values.items() if set_property(name, value)]
    logger.info("Applied %d property updates, %d changed", len(values), len(changed))
    return changed


def property_names() -> Iterable[str]:
    """Names of every property looked up so far."""
    return list(_anchor.handles)
