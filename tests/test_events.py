"""Tests for repocache.events module."""

import pytest

from repocache.events import EventHook


class TestEventHook:
    """Tests for EventHook."""

    def test_fire_without_subscribers(self):
        """Test that firing an empty hook is a no-op."""
        EventHook("empty").fire("anything", 1)

    def test_handlers_called_in_order(self):
        """Test subscription order is delivery order."""
        hook = EventHook("ordered")
        calls = []
        hook.subscribe(lambda value: calls.append(("first", value)))
        hook.subscribe(lambda value: calls.append(("second", value)))

        hook.fire(7)

        assert calls == [("first", 7), ("second", 7)]

    def test_subscribe_returns_handler(self):
        """Test decorator-style use."""
        hook = EventHook("decorated")

        @hook.subscribe
        def handler():
            pass

        assert handler is not None
        assert len(hook) == 1

    def test_unsubscribe(self):
        """Test that removed handlers are not called."""
        hook = EventHook("removable")
        calls = []
        handler = hook.subscribe(calls.append)

        assert hook.unsubscribe(handler) is True
        hook.fire(1)

        assert calls == []

    def test_unsubscribe_unknown(self):
        """Test removing a handler that was never added."""
        assert EventHook("unknown").unsubscribe(print) is False

    def test_subscribe_during_fire_applies_next_time(self):
        """Test that the handler list is snapshotted per fire."""
        hook = EventHook("growing")
        calls = []

        def first():
            calls.append("first")
            hook.subscribe(lambda: calls.append("late"))

        hook.subscribe(first)
        hook.fire()
        assert calls == ["first"]

        hook.fire()
        assert calls == ["first", "first", "late"]

    def test_handler_exception_propagates(self):
        """Test that handler errors reach the caller."""
        hook = EventHook("failing")

        def boom():
            raise RuntimeError("handler failed")

        hook.subscribe(boom)

        with pytest.raises(RuntimeError, match="handler failed"):
            hook.fire()

    def test_repr(self):
        """Test the debug representation."""
        assert repr(EventHook("named")) == "EventHook('named', handlers=0)"
