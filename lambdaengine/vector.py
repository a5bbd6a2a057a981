"""Small fixed-size vectors with component-wise arithmetic."""

from __future__ import annotations

import math
import operator
from numbers import Real
from typing import Callable, Iterator

from .errors import expect


def _divide(lhs: Real, rhs: Real) -> Real:
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(lhs, int) and isinstance(rhs, int):
        quotient = abs(lhs) // abs(rhs)
        return quotient if (lhs < 0) == (rhs < 0) else -quotient
    return lhs / rhs


def _dot(lhs: "_Vector", rhs: "_Vector") -> Real:
    return sum(a * b for a, b in zip(lhs, rhs))


class _Vector:
    """Shared behaviour of the fixed-size vector types."""

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def __init__(self, *args: object) -> None:
        size = len(self._fields)
        if not args:
            values: tuple = (0,) * size
        elif len(args) == 1 and isinstance(args[0], Real):
            values = (args[0],) * size
        else:
            flat: list = []
            for arg in args:
                if isinstance(arg, _Vector):
                    flat.extend(arg)
                elif isinstance(arg, Real):
                    flat.append(arg)
                else:
                    raise TypeError(
                        f"{type(self).__name__} components must be numbers or vectors, "
                        f"not {type(arg).__name__}"
                    )
            if len(flat) != size:
                raise TypeError(
                    f"{type(self).__name__} needs {size} components, got {len(flat)}"
                )
            values = tuple(flat)
        self._assign(values)

    def _assign(self, values: tuple) -> None:
        for name, value in zip(self._fields, values):
            setattr(self, name, value)

    def __iter__(self) -> Iterator:
        return (getattr(self, name) for name in self._fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self)})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self) == tuple(other)

    __hash__ = None  # type: ignore[assignment]

    def _length(self) -> float:
        length_sq = _dot(self, self)
        expect(length_sq != 0, "zero length^2 in {}.length", type(self).__name__)
        return math.sqrt(length_sq)

    def _elementwise(self, other: object, op: Callable, allow_scalar: bool):
        if type(other) is type(self):
            return tuple(op(a, b) for a, b in zip(self, other))
        if allow_scalar and isinstance(other, Real):
            return tuple(op(a, other) for a in self)
        return None

    def _binary(self, other: object, op: Callable, allow_scalar: bool):
        values = self._elementwise(other, op, allow_scalar)
        if values is None:
            return NotImplemented
        return type(self)(*values)

    def _inplace(self, other: object, op: Callable, allow_scalar: bool):
        values = self._elementwise(other, op, allow_scalar)
        if values is None:
            return NotImplemented
        self._assign(values)
        return self

    def __add__(self, other):
        return self._binary(other, operator.add, False)

    def __sub__(self, other):
        return self._binary(other, operator.sub, False)

    def __mul__(self, other):
        return self._binary(other, operator.mul, True)

    def __rmul__(self, other):
        if isinstance(other, Real):
            return type(self)(*(other * a for a in self))
        return NotImplemented

    def __truediv__(self, other):
        return self._binary(other, _divide, True)

    def __iadd__(self, other):
        return self._inplace(other, operator.add, False)

    def __isub__(self, other):
        return self._inplace(other, operator.sub, False)

    def __imul__(self, other):
        return self._inplace(other, operator.mul, True)

    def __itruediv__(self, other):
        return self._inplace(other, _divide, True)

    def __pos__(self):
        return type(self)(*self)

    def __neg__(self):
        return type(self)(*(-a for a in self))


class Vec2(_Vector):
    """A two-component vector."""

    __slots__ = ("x", "y")
    _fields = ("x", "y")

    def __init__(self, *args: object) -> None:
        super().__init__(*args)

    @staticmethod
    def dot(lhs: "Vec2", rhs: "Vec2") -> Real:
        """Sum of the products of matching components."""
        return _dot(lhs, rhs)

    def length(self) -> float:
        """Euclidean length; a zero-length vector is an error."""
        return self._length()


class Vec3(_Vector):
    """A three-component vector."""

    __slots__ = ("x", "y", "z")
    _fields = ("x", "y", "z")

    def __init__(self, *args: object) -> None:
        super().__init__(*args)

    @staticmethod
    def dot(lhs: "Vec3", rhs: "Vec3") -> Real:
        """Sum of the products of matching components."""
        return _dot(lhs, rhs)

    @staticmethod
    def cross(lhs: "Vec3", rhs: "Vec3") -> "Vec3":
        """Cross product of two vectors."""
        return Vec3(
            lhs.y * rhs.z - lhs.z * rhs.y,
            lhs.z * rhs.x - lhs.x * rhs.z,
            lhs.x * rhs.y - lhs.y * rhs.x,
        )

    def length(self) -> float:
        """Euclidean length; a zero-length vector is an error."""
        return self._length()

    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def yz(self) -> Vec2:
        return Vec2(self.y, self.z)


class Vec4(_Vector):
    """A four-component vector."""

    __slots__ = ("x", "y", "z", "w")
    _fields = ("x", "y", "z", "w")

    def __init__(self, *args: object) -> None:
        super().__init__(*args)

    @staticmethod
    def dot(lhs: "Vec4", rhs: "Vec4") -> Real:
        """Sum of the products of matching components."""
        return _dot(lhs, rhs)

    def length(self) -> float:
        """Euclidean length; a zero-length vector is an error."""
        return self._length()

    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def yz(self) -> Vec2:
        return Vec2(self.y, self.z)

    def zw(self) -> Vec2:
        return Vec2(self.z, self.w)

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def yzw(self) -> Vec3:
        return Vec3(self.y, self.z, self.w)