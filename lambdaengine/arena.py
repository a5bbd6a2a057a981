"""A bump allocator with scoped rollback and ordered destruction."""

from __future__ import annotations

from typing import Any, Callable

from .errors import expect

# Every object placed in the arena occupies one reference-sized slot.
_SLOT_SIZE = 8
_SLOT_ALIGNMENT = 8

# A destructor record holds three references: the hook, the object and the link back.
_NODE_SIZE = 3 * _SLOT_SIZE
_NODE_ALIGNMENT = _SLOT_ALIGNMENT


def kb_to_b(kilobytes: int) -> int:
    """Kilobytes to bytes."""
    return kilobytes * 1024


def mb_to_b(megabytes: int) -> int:
    """Megabytes to bytes."""
    return megabytes * 1024 * 1024


def gb_to_b(gigabytes: int) -> int:
    """Gigabytes to bytes."""
    return gigabytes * 1024 * 1024 * 1024


def _needs_destruction(factory: Callable[..., Any]) -> bool:
    """Whether objects made by ``factory`` carry a ``close`` hook to run on release."""
    return callable(getattr(factory, "close", None))


def _align_up(value: int, alignment: int) -> int:
    return (value + alignment - 1) & ~(alignment - 1)


class Arena:
    """A fixed-capacity region that hands out space by bumping an offset.

    Objects whose type defines ``close`` are closed, newest first, when the
    arena is reset, when a scope ends, or when the arena goes away.
    """

    def __init__(self, capacity: int) -> None:
        self._buffer = bytearray(capacity)
        self._capacity = capacity
        self._used = 0
        self._destructors: list[Any] = []

    def __del__(self) -> None:
        if getattr(self, "_destructors", None):
            self._destroy_chain()

    def _destroy_chain(self, stopping_point: int = 0) -> None:
        while len(self._destructors) > stopping_point:
            self._destructors.pop().close()

    def allocate_bytes(self, size: int, alignment: int) -> memoryview | None:
        """Reserve ``size`` bytes at ``alignment``; ``None`` if empty or out of room."""
        expect(alignment > 0, "expected non-zero alignment")
        expect((alignment & (alignment - 1)) == 0, "expected power of two alignment")

        if size == 0:
            return None

        aligned = _align_up(self._used, alignment)
        new_used = aligned + size
        if new_used > self._capacity:
            return None

        self._used = new_used
        return memoryview(self._buffer)[aligned:new_used]

    def allocate(self, factory: Callable[[], Any], count: int) -> list:
        """Make ``count`` default objects with ``factory``; empty list if out of room.

        Objects that need closing cannot be allocated in bulk.
        """
        if _needs_destruction(factory):
            raise TypeError("allocate requires objects that need no closing")

        used_mark = self._used
        if self.allocate_bytes(count * _SLOT_SIZE, _SLOT_ALIGNMENT) is None:
            return []

        try:
            return [factory() for _ in range(count)]
        except BaseException:
            self._used = used_mark
            raise

    def emplace(self, factory: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Construct one object in the arena; ``None`` if out of room.

        If construction raises, the arena is left as it was and the error propagates.
        """
        used_mark = self._used
        destructible = _needs_destruction(factory)

        if destructible:
            alignment = max(_SLOT_ALIGNMENT, _NODE_ALIGNMENT)
            size = _align_up(_NODE_SIZE, _SLOT_ALIGNMENT) + _SLOT_SIZE
        else:
            alignment = _SLOT_ALIGNMENT
            size = _SLOT_SIZE

        if self.allocate_bytes(size, alignment) is None:
            return None

        try:
            obj = factory(*args, **kwargs)
        except BaseException:
            self._used = used_mark
            raise

        if destructible:
            self._destructors.append(obj)
        return obj

    def move_from(self, other: "Arena") -> "Arena":
        """Take over ``other``'s storage and objects, leaving it empty; returns self."""
        if other is self:
            return self
        if self._destructors:
            self._destroy_chain()

        self._buffer = other._buffer
        self._capacity = other._capacity
        self._used = other._used
        self._destructors = other._destructors

        other._buffer = bytearray()
        other._capacity = 0
        other._used = 0
        other._destructors = []
        return self

    def scope(self) -> "ArenaScope":
        """A context manager that rolls the arena back to this point on exit."""
        return ArenaScope(self)

    def capacity(self) -> int:
        return self._capacity

    def remaining(self) -> int:
        return self._capacity - self._used

    def used(self) -> int:
        return self._used

    def reset(self) -> None:
        """Close every object needing it and make the whole capacity free again."""
        self._destroy_chain()
        self._used = 0


class ArenaScope:
    """Marks an arena's state and restores it when the ``with`` block ends."""

    def __init__(self, arena: Arena) -> None:
        self._arena = arena
        self._used_mark = arena._used
        self._chain_mark = len(arena._destructors)

    def __enter__(self) -> "ArenaScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._arena._destroy_chain(self._chain_mark)
        self._arena._used = self._used_mark