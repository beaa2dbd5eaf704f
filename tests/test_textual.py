"""Tests for dynaprop.textual: Textual integration layer."""

import logging
import threading

import pytest
from textual.css.query import NoMatches

from dynaprop import DynamicIntProperty, set_property
from dynaprop import textual as dtx


class _MockApp:
    """Minimal mock matching the Textual App interface dtx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestBind:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        p = DynamicIntProperty("tx.not_running", 1)
        effects = []
        dtx.bind(app, p, effects.append)
        set_property("tx.not_running", "2")
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        p = DynamicIntProperty("tx.paused", 1)
        effects = []
        dtx.bind(app, p, effects.append)
        with dtx.pause(app):
            set_property("tx.paused", "2")
        assert effects == []

    def test_fires_when_safe(self):
        app = _MockApp()
        p = DynamicIntProperty("tx.safe", 1)
        effects = []
        dtx.bind(app, p, effects.append)
        set_property("tx.safe", "2")
        assert effects == [2]

    def test_fire_immediately(self):
        app = _MockApp()
        p = DynamicIntProperty("tx.immediate", 7)
        effects = []
        dtx.bind(app, p, effects.append, fire_immediately=True)
        assert effects == [7]

    def test_catches_nomatch(self, caplog):
        """NoMatches from widget queries are silently swallowed."""
        app = _MockApp()
        p = DynamicIntProperty("tx.nomatch", 1)

        def _raise_nomatch(v):
            raise NoMatches("StatusFooter")

        dtx.bind(app, p, _raise_nomatch)
        with caplog.at_level(logging.ERROR, logger="dynaprop.dynamic_property"):
            set_property("tx.nomatch", "2")
        assert caplog.records == []

    def test_real_errors_are_logged(self, caplog):
        """Other exceptions reach the property's callback error log."""
        app = _MockApp()
        p = DynamicIntProperty("tx.error", 1)

        def _raise_value_error(v):
            raise ValueError("boom")

        dtx.bind(app, p, _raise_value_error)
        with caplog.at_level(logging.ERROR, logger="dynaprop.dynamic_property"):
            set_property("tx.error", "2")
        assert "boom" in caplog.text

    def test_dispose_stops_binding(self):
        app = _MockApp()
        p = DynamicIntProperty("tx.dispose", 1)
        effects = []
        b = dtx.bind(app, p, effects.append)
        set_property("tx.dispose", "2")
        assert effects == [2]
        b.dispose()
        b.dispose()
        assert b.disposed
        set_property("tx.dispose", "3")
        assert effects == [2]
        assert p.prop.get_callbacks() == ()

    def test_thread_marshal(self):
        """Updates from a background thread use call_from_thread."""
        app = _MockApp()
        p = DynamicIntProperty("tx.thread", 1)
        effects = []
        dtx.bind(app, p, effects.append)

        t = threading.Thread(target=lambda: set_property("tx.thread", "2"))
        t.start()
        t.join()

        assert effects == [2]
        assert len(app._call_from_thread_log) == 1


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert dtx.is_safe(app)

        with pytest.raises(RuntimeError):
            with dtx.pause(app):
                assert not dtx.is_safe(app)
                raise RuntimeError("oops")

        assert dtx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        app = _MockApp()
        attrs_before = set(vars(app))
        with dtx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during == set(vars(app))

    def test_multiple_apps_independent(self):
        app_a = _MockApp()
        app_b = _MockApp()
        with dtx.pause(app_a):
            assert not dtx.is_safe(app_a)
            assert dtx.is_safe(app_b)
