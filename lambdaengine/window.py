"""A window's event queue, event handler and display mode."""

from __future__ import annotations

import collections
import enum
from dataclasses import dataclass
from typing import Callable, Optional


class WindowMode(enum.Enum):
    """How a window occupies the screen."""

    FULLSCREEN = enum.auto()
    WINDOWED = enum.auto()


@dataclass(frozen=True)
class WindowQuitEvent:
    """The user asked for the window to close; it carries no payload."""


WindowEvent = WindowQuitEvent

EventHandler = Callable[[WindowEvent], bool]


@dataclass(frozen=True)
class WindowConfig:
    """Initial size, title and mode of a window."""

    height: int
    width: int
    title: str
    start_mode: WindowMode = WindowMode.WINDOWED


class Window:
    """A window that queues events and hands them to an event handler.

    Events wait in the queue until :meth:`process_events` runs with a handler
    set. A handler returns ``True`` to keep receiving events in this pass and
    ``False`` to stop; events after that stay queued.
    """

    def __init__(self, config: WindowConfig) -> None:
        self.config = config
        self._events: collections.deque[WindowEvent] = collections.deque()
        self._event_handler: Optional[EventHandler] = None
        self._mode = WindowMode.WINDOWED
        self.set_mode(config.start_mode)

    @property
    def mode(self) -> WindowMode:
        """The current display mode."""
        return self._mode

    def post_event(self, event: WindowEvent) -> None:
        """Queue ``event`` for the next :meth:`process_events`."""
        self._events.append(event)

    def process_events(self) -> None:
        """Deliver queued events, oldest first, until the handler declines more."""
        if self._event_handler is None:
            return
        while self._events:
            event = self._events.popleft()
            if not self._event_handler(event):
                break

    def set_event_handler(self, event_handler: Optional[EventHandler]) -> None:
        """Set the function that receives events; ``None`` removes it."""
        self._event_handler = event_handler

    def set_mode(self, mode: WindowMode) -> None:
        """Switch between windowed and fullscreen; the same mode is a no-op."""
        if self._mode is mode:
            return
        self._mode = mode