"""Thread-aware logging that fans messages out to registered sinks."""

from __future__ import annotations

import abc
import enum
import threading
from dataclasses import dataclass
from datetime import datetime, timezone


class Level(enum.IntEnum):
    """Severity of a log message, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def __str__(self) -> str:
        return f"[{self.name.lower()}]"


@dataclass(frozen=True)
class SinkPayload:
    """Everything a sink needs to emit one message."""

    time: datetime
    level: Level
    message: str
    thread_name: str
    thread_name_padding: int


class Sink(abc.ABC):
    """Destination for log messages."""

    @abc.abstractmethod
    def put(self, payload: SinkPayload) -> None:
        """Emit one message."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Flush anything buffered."""


_UNKNOWN_THREAD = "???"

_max_thread_name_length = len(_UNKNOWN_THREAD)
_length_lock = threading.Lock()

_thread_names: dict[int, str] = {}
_thread_names_lock = threading.Lock()

_sinks: list[Sink] = []
_sinks_lock = threading.Lock()


def _dispatch(level: Level, message: str, thread_name: str) -> None:
    payload = SinkPayload(
        time=datetime.now(timezone.utc),
        level=level,
        message=message,
        thread_name=thread_name,
        thread_name_padding=_max_thread_name_length,
    )
    with _sinks_lock:
        for sink in _sinks:
            sink.put(payload)


def add_sink(sink: Sink) -> None:
    """Register a sink that receives every subsequent message."""
    with _sinks_lock:
        _sinks.append(sink)


def clear_sinks() -> None:
    """Remove all registered sinks."""
    with _sinks_lock:
        _sinks.clear()


def register_thread(thread_name: str) -> None:
    """Give the calling thread a name used in its log messages.

    A thread that is already registered keeps its first name.
    """
    global _max_thread_name_length
    ident = threading.get_ident()
    with _thread_names_lock:
        if ident in _thread_names:
            return
        _thread_names[ident] = thread_name

    with _length_lock:
        _max_thread_name_length = max(_max_thread_name_length, len(thread_name))

    info("Thread '{}' registered (id: {})", thread_name, ident)


def unregister_thread(thread_id: int) -> None:
    """Forget the name of the thread with identifier ``thread_id``."""
    with _thread_names_lock:
        thread_name = _thread_names.pop(thread_id, None)
    if thread_name is None:
        return
    _dispatch(
        Level.INFO,
        f"Thread '{thread_name}' unregistered (id: {thread_id})",
        thread_name,
    )


def put_message(level: Level, message: str) -> None:
    """Send an already formatted message to every sink."""
    ident = threading.get_ident()
    with _thread_names_lock:
        thread_name = _thread_names.get(ident, _UNKNOWN_THREAD)
    _dispatch(level, message, thread_name)


def debug(fmt: str, *args: object) -> None:
    """Log a debug message built with ``str.format``."""
    put_message(Level.DEBUG, fmt.format(*args))


def info(fmt: str, *args: object) -> None:
    """Log an informational message built with ``str.format``."""
    put_message(Level.INFO, fmt.format(*args))


def warn(fmt: str, *args: object) -> None:
    """Log a warning built with ``str.format``."""
    put_message(Level.WARN, fmt.format(*args))


def error(fmt: str, *args: object) -> None:
    """Log an error built with ``str.format``."""
    put_message(Level.ERROR, fmt.format(*args))


def fatal(fmt: str, *args: object) -> None:
    """Log a fatal error built with ``str.format``."""
    put_message(Level.FATAL, fmt.format(*args))