"""Callback-avoidance registry: property classes that never react to changes.

A PropertyWrapper registers a change hook on its DynamicProperty unless its
exact class is listed here. The built-in typed variants only read values, so
they are listed at startup and their instances skip the registration cost.

Keys are class identities, not names or equality. Readers never lock: writers
build a new dict under registry_lock and publish it with a single assignment,
so a reader sees either the old or the new registry, never a partial one.
"""

from __future__ import annotations

import logging
from typing import Iterable

from dynaprop import _anchor

logger = logging.getLogger("dynaprop.registry")


def register_subclass_with_no_callback(cls: type) -> None:
    """Exempt instances of exactly cls from change-hook registration.

    Subclasses of cls are not exempted; register them separately if they
    do not override property_changed().
    """
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {cls!r}")
    with _anchor.registry_lock:
        if id(cls) in _anchor.no_callback_types:
            return
        _anchor.no_callback_types = {**_anchor.no_callback_types, id(cls): cls}
    logger.debug("Registered %s as a no-callback property class", cls.__qualname__)


def is_registered(cls: type) -> bool:
    return _anchor.no_callback_types.get(id(cls)) is cls


def registered_types() -> tuple[type, ...]:
    return tuple(_anchor.no_callback_types.values())


def initialize(types: Iterable[type]) -> None:
    """Startup routine: register the built-in variants once.

    Once every class is registered, later calls are ignored; a call that
    fails partway leaves the registry uninitialized so it can be retried.
    Extra classes can always be added with register_subclass_with_no_callback().
    """
    if _anchor.registry_initialized:
        return
    for cls in types:
        register_subclass_with_no_callback(cls)
    with _anchor.registry_lock:
        _anchor.registry_initialized = True
