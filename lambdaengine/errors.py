"""Exception types and the ``expect`` assertion helper."""

from __future__ import annotations

import os

from . import log


class LambdaError(RuntimeError):
    """Base class for errors raised by the engine."""


class SystemFailure(LambdaError):
    """An operating-system call failed with an error code."""

    def __init__(self, error_code: int, message: str) -> None:
        self.error_code = error_code
        self.reason = message
        super().__init__(f"System error ({os.strerror(error_code)}): {message}")


class ExpectationError(LambdaError):
    """An internal invariant checked by :func:`expect` did not hold."""


def expect(predicate: object, message: str, *args: object) -> None:
    """Log a fatal message and raise :class:`ExpectationError` if ``predicate`` is false."""
    if predicate:
        return
    text = message.format(*args)
    log.fatal("{}", text)
    raise ExpectationError(text)