"""Textual integration for dynaprop. Opt-in: requires textual.

Configuration updates usually arrive on a poller thread; widgets must only be
touched from the app thread. bind() marshals change effects through
call_from_thread, skips them while the app is stopped or paused, and swallows
NoMatches from widget queries made while the tree is being rebuilt.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state: keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


class Binding:
    """Disposable link between a property and a widget effect."""

    __slots__ = ("_prop", "_callback")

    def __init__(self, prop, callback):
        self._prop = prop
        self._callback = callback

    @property
    def disposed(self) -> bool:
        return self._callback is None

    def dispose(self) -> None:
        """Detach from the property. Safe to call twice."""
        if self._callback is not None:
            self._prop.prop.remove_callback(self._callback)
            self._callback = None


def bind(app, prop, effect, *, fire_immediately=False) -> Binding:
    """Call effect(prop.get_value()) on the app thread whenever prop changes.

    Bypasses the wrapper's own property_changed hook, so it works with the
    built-in read-only variants too.
    """
    _main = threading.get_ident()

    def _guarded():
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe)
        else:
            _safe()

    def _safe():
        try:
            effect(prop.get_value())
        except NoMatches:
            pass

    prop.prop.add_callback(_guarded)
    if fire_immediately:
        _guarded()
    return Binding(prop, _guarded)
