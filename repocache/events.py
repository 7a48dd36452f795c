"""Synchronous event hooks.

An EventHook is a plain subscriber registry. Firing a hook with no
subscribers does nothing, so callers never check before firing.
"""

from typing import Any, Callable


class EventHook:
    """A named list of handlers invoked in subscription order."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def subscribe(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Register a handler.

        Returns the handler so the method can be used as a decorator.
        """
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Callable[..., Any]) -> bool:
        """Remove a handler.

        Returns:
            True if the handler was registered, False otherwise.
        """
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def fire(self, *args: Any) -> None:
        """Invoke every handler with the given arguments.

        Handlers added or removed while firing take effect on the next fire.
        Exceptions raised by a handler propagate to the caller.
        """
        for handler in tuple(self._handlers):
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"EventHook({self.name!r}, handlers={len(self._handlers)})"
