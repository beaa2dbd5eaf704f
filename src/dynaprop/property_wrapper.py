"""PropertyWrapper: typed access to a DynamicProperty.

A wrapper binds a name and a default to the shared DynamicProperty for that
name and exposes a typed get_value(). Subclasses react to changes by
overriding property_changed().

Registering the change hook costs a copy of the property's callback tuple,
which adds up across thousands of read-only accessors. So the hook is only
registered when the wrapper's exact class is absent from the no-callback
registry. The built-in variants are in the registry; a class that extends
one of them is not, and gets its hook.
"""

from __future__ import annotations

import logging
import threading
import weakref
from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from dynaprop import _anchor, registry
from dynaprop.dynamic_property import DynamicProperty

logger = logging.getLogger("dynaprop.property_wrapper")

V = TypeVar("V")


class _ChangeHook:
    """Callback that forwards to wrapper.property_changed() without keeping
    the wrapper alive. When the wrapper is collected the hook removes itself
    from the property."""

    __slots__ = ("_ref", "_prop")

    def __init__(self, wrapper: PropertyWrapper, prop: DynamicProperty) -> None:
        self._prop = prop
        self._ref = weakref.ref(wrapper, self._detach)

    def __call__(self) -> None:
        wrapper = self._ref()
        if wrapper is not None:
            wrapper.property_changed()

    def _detach(self, _ref) -> None:
        self._prop.remove_callback(self)


class PropertyWrapper(ABC, Generic[V]):
    """Base class for typed dynamic property accessors."""

    def __init__(self, name: str, default_value: V) -> None:
        self.prop = DynamicProperty.get_instance(name)
        self._default_value = default_value
        # Copy-on-write, like DynamicProperty._callbacks
        self._registered: tuple[Callable[[], None], ...] = ()
        self._registered_lock = threading.Lock()
        cls = type(self)
        if not registry.is_registered(cls):
            if cls.property_changed is PropertyWrapper.property_changed:
                _warn_unregistered(cls)
            hook = _ChangeHook(self, self.prop)
            self._registered = (hook,)
            self.prop.add_callback(hook)

    def get_name(self) -> str:
        return self.prop.get_name()

    @abstractmethod
    def get_value(self) -> V:
        """Current typed value, or the default when unset or unparsable."""

    def get_default_value(self) -> V:
        return self._default_value

    def get_changed_timestamp(self) -> int:
        """Milliseconds since the epoch of the last change, or 0."""
        return self.prop.get_changed_timestamp()

    def property_changed(self) -> None:
        """Called after the value changes. Does nothing by default.

        Only runs for classes not in the no-callback registry.
        """

    def add_callback(self, callback: Callable[[], None] | None) -> None:
        """Register callback on the underlying property. None is ignored."""
        if callback is None:
            return
        with self._registered_lock:
            self._registered = self._registered + (callback,)
        self.prop.add_callback(callback)

    def remove_all_callbacks(self) -> None:
        """Detach every callback this wrapper registered, its own hook included."""
        with self._registered_lock:
            registered, self._registered = self._registered, ()
        for callback in registered:
            self.prop.remove_callback(callback)

    def __str__(self) -> str:
        current = self.prop.get_string(str(self._default_value))
        return f"DynamicProperty: {{name={self.prop.get_name()}, current value={current}}}"

    __repr__ = __str__


def _warn_unregistered(cls: type) -> None:
    with _anchor.warned_lock:
        if cls in _anchor.warned_types:
            return
        _anchor.warned_types.add(cls)
    logger.warning(
        "%s does not override property_changed() but is not registered with "
        "register_subclass_with_no_callback(); every instance pays for an unused callback",
        cls.__qualname__,
    )
