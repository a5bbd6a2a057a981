"""Ownership helpers: a handle closed on release and a deferred call."""

from __future__ import annotations

from typing import Any, Callable

_UNSET: Any = object()


class AutoRelease:
    """Owns a handle and closes it when reset or when the ``with`` block ends.

    A handle equal to ``invalid`` is treated as empty and is never closed.
    """

    def __init__(self, handle: Any, close: Callable[[Any], Any], invalid: Any = None) -> None:
        self._handle = handle
        self._close = close
        self._invalid = invalid

    def release(self) -> Any:
        """Give up ownership and return the handle without closing it."""
        handle = self._handle
        self._handle = self._invalid
        return handle

    def reset(self, new_handle: Any = _UNSET) -> None:
        """Close the current handle, if valid, and take ``new_handle`` (empty by default)."""
        if new_handle is _UNSET:
            new_handle = self._invalid
        if self._handle != self._invalid:
            self._close(self._handle)
        self._handle = new_handle

    def get(self) -> Any:
        return self._handle

    def __bool__(self) -> bool:
        return self._handle != self._invalid

    def __enter__(self) -> "AutoRelease":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.reset()


class Deferred:
    """Calls ``function`` when the ``with`` block ends, however it ends."""

    def __init__(self, function: Callable[[], None]) -> None:
        self._function = function

    def __enter__(self) -> "Deferred":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._function()