"""Output streams and the log sink that writes to them."""

from __future__ import annotations

import abc
import io
import sys
import weakref
from typing import IO, Iterable

from .log import Level, Sink, SinkPayload


class OStream(abc.ABC):
    """A destination for text output."""

    @abc.abstractmethod
    def write(self, output: str) -> int:
        """Write ``output`` and return how much was written."""

    def flush(self) -> None:
        """Flush buffered output; does nothing by default."""


class FileOStream(OStream):
    """An output stream over a file object."""

    def __init__(self, file: IO | None) -> None:
        self._file = file

    def write(self, output: str) -> int:
        if self._file is None:
            return 0
        if isinstance(self._file, io.TextIOBase):
            self._file.write(output)
            return len(output)
        data = output.encode("utf-8")
        self._file.write(data)
        return len(data)

    def flush(self) -> None:
        if self._file is None:
            return
        self._file.flush()

    def close(self) -> None:
        """Close the file; later writes write nothing."""
        if self._file is not None:
            self._file.close()
            self._file = None


def std_out() -> OStream:
    """A stream over the process's standard output."""
    return FileOStream(sys.stdout)


def std_err() -> OStream:
    """A stream over the process's standard error."""
    return FileOStream(sys.stderr)


class SynchronisedOStream(OStream):
    """A stream that flushes its sibling streams before each write.

    Siblings are held weakly, so a sibling that no longer exists is skipped.
    """

    def __init__(self, stream: OStream, synced_streams: Iterable[OStream]) -> None:
        self._stream = stream
        self._synced = [weakref.ref(other) for other in synced_streams]

    def write(self, output: str) -> int:
        for ref in self._synced:
            other = ref()
            if other is not None:
                other.flush()
        return self._stream.write(output)

    def flush(self) -> None:
        self._stream.flush()


def synchronise(*args: OStream) -> list[OStream]:
    """Wrap the given streams so that writing to one flushes all the others."""
    streams = list(args)
    return [
        SynchronisedOStream(stream, [other for other in streams if other is not stream])
        for stream in streams
    ]


class OStreamSink(Sink):
    """A log sink that writes messages within a level range to a stream."""

    def __init__(self, stream: OStream, min_level: Level, max_level: Level) -> None:
        self._stream = stream
        self._min_level = min_level
        self._max_level = max_level

    def put(self, payload: SinkPayload) -> None:
        if not self._min_level <= payload.level <= self._max_level:
            return
        stamp = payload.time.strftime("%Y-%m-%d %H:%M:%S")
        name = f"{payload.thread_name:<{payload.thread_name_padding}}"
        level = f"{str(payload.level):<7}"
        self._stream.write(f"[{stamp}] {name} {level} >> {payload.message}\n")

    def flush(self) -> None:
        self._stream.flush()