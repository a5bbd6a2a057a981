"""Render commands packed into a byte buffer and a renderer that submits them."""

from __future__ import annotations

import abc
import enum
import struct
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from .arena import Arena
from .errors import expect
from .vector import Vec3, Vec4
from .window import Window


class CommandType(enum.IntEnum):
    """Kinds of render command."""

    CLEAR = 0


@dataclass(frozen=True)
class ClearCommand:
    """Clear the colour buffer to ``rgba``."""

    rgba: Vec4

    _FORMAT = struct.Struct("<4f")

    def pack(self) -> bytes:
        """The command's payload as bytes."""
        return self._FORMAT.pack(*self.rgba)

    @classmethod
    def unpack(cls, data: Union[bytes, memoryview]) -> "ClearCommand":
        """Rebuild a command from its payload."""
        return cls(Vec4(*cls._FORMAT.unpack(bytes(data))))


Command = ClearCommand

_COMMANDS = {CommandType.CLEAR: ClearCommand}

# Each command is preceded by its type and the size of its payload.
_HEADER = struct.Struct("<iI")


class CommandBuffer:
    """Packs commands one after another into a fixed-size byte buffer."""

    def __init__(self, buffer: Union[bytearray, memoryview]) -> None:
        self._buffer = memoryview(buffer)
        self._offset = 0

    def __len__(self) -> int:
        """Bytes taken by the commands pushed so far."""
        return self._offset

    def push(self, command_type: CommandType, command: Command) -> None:
        """Append one command; running out of room is an error."""
        payload = command.pack()
        size = _HEADER.size + len(payload)
        expect(
            self._offset + size < len(self._buffer),
            "Out of capacity for command buffer",
        )
        _HEADER.pack_into(self._buffer, self._offset, int(command_type), len(payload))
        start = self._offset + _HEADER.size
        self._buffer[start:start + len(payload)] = payload
        self._offset += size

    def __iter__(self) -> Iterator[tuple[CommandType, Command]]:
        """Yield ``(type, command)`` pairs in the order they were pushed."""
        offset = 0
        while offset < self._offset:
            type_value, size = _HEADER.unpack_from(self._buffer, offset)
            command_type = CommandType(type_value)
            start = offset + _HEADER.size
            yield command_type, _COMMANDS[command_type].unpack(self._buffer[start:start + size])
            offset = start + size

    def clear(self) -> None:
        """Forget every command pushed so far."""
        self._offset = 0


class CommandList:
    """Records commands into a :class:`CommandBuffer`."""

    def __init__(self, buffer: CommandBuffer) -> None:
        self._buffer = buffer

    def clear(self, *args: object) -> None:
        """Queue a clear.

        Accepts ``(r, g, b, a)``, ``(Vec3, a)``, ``(Vec3,)`` with alpha 1.0,
        or ``(Vec4,)``.
        """
        match args:
            case (Vec4() as rgba,):
                colour = rgba
            case (Vec3() as rgb,):
                colour = Vec4(rgb, 1.0)
            case (Vec3() as rgb, alpha):
                colour = Vec4(rgb, alpha)
            case (red, green, blue, alpha):
                colour = Vec4(red, green, blue, alpha)
            case _:
                raise TypeError("clear takes (r, g, b, a), (Vec3[, a]) or (Vec4)")
        colour = Vec4(*(float(component) for component in colour))
        self._buffer.push(CommandType.CLEAR, ClearCommand(colour))


class Backend(abc.ABC):
    """A graphics API that executes recorded commands."""

    @abc.abstractmethod
    def begin_frame(self) -> None:
        """Prepare for a new frame."""

    @abc.abstractmethod
    def end_frame(self, commands: CommandBuffer) -> None:
        """Execute ``commands`` and present the frame."""


class Api(enum.Enum):
    """Graphics APIs a renderer may be asked to use."""

    DIRECTX = enum.auto()
    OPENGL = enum.auto()
    VULKAN = enum.auto()


_API_NAMES = {Api.DIRECTX: "DirectX", Api.OPENGL: "OpenGL", Api.VULKAN: "Vulkan"}


def make_backend(api: Api, window: Window) -> Backend:
    """Create the built-in backend for ``api``; none are available, so this fails."""
    expect(False, "No backend support for {}", _API_NAMES[api])
    raise AssertionError("unreachable")


@dataclass(frozen=True)
class RendererConfig:
    """Which API to use and how many bytes to reserve for commands."""

    api: Api
    command_buffer_size: int


class Renderer:
    """Collects commands each frame and hands them to a backend.

    The command buffer is carved out of ``arena``. Without an explicit
    ``backend`` one is made for ``config.api``.
    """

    def __init__(
        self,
        config: RendererConfig,
        window: Window,
        arena: Arena,
        backend: Optional[Backend] = None,
    ) -> None:
        self._window = window
        self._backend = backend if backend is not None else make_backend(config.api, window)
        storage = arena.allocate_bytes(config.command_buffer_size, 1)
        self._command_buffer = CommandBuffer(storage if storage is not None else bytearray())

    @property
    def command_buffer(self) -> CommandBuffer:
        """The buffer commands are recorded into."""
        return self._command_buffer

    def submit(self, func: Callable[[CommandList], object]) -> None:
        """Call ``func`` with a command list that records into this renderer."""
        func(CommandList(self._command_buffer))

    def begin_frame(self) -> None:
        self._backend.begin_frame()

    def end_frame(self) -> None:
        self._backend.end_frame(self._command_buffer)