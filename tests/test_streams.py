import gc
import io
from datetime import datetime, timezone

import pytest

from lambdaengine.log import Level, SinkPayload
from lambdaengine.streams import (
    FileOStream,
    OStream,
    OStreamSink,
    SynchronisedOStream,
    std_err,
    std_out,
    synchronise,
)


class RecordingStream(OStream):
    def __init__(self):
        self.written = []
        self.flushes = 0

    def write(self, output):
        self.written.append(output)
        return len(output)

    def flush(self):
        self.flushes += 1


class MinimalStream(OStream):
    def __init__(self):
        self.text = ""

    def write(self, output):
        self.text += output
        return len(output)


def make_payload(level=Level.INFO, message="hello", name="main", padding=4):
    return SinkPayload(
        time=datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc),
        level=level,
        message=message,
        thread_name=name,
        thread_name_padding=padding,
    )


def test_default_flush_leaves_output_alone():
    minimal = MinimalStream()
    main = RecordingStream()
    out, side = synchronise(main, minimal)
    assert side.write("abc") == 3
    assert out.write("xyz") == 3
    side.flush()
    assert minimal.text == "abc"
    assert main.written == ["xyz"]


def test_file_ostream_writes_text():
    buffer = io.StringIO()
    stream = FileOStream(buffer)
    assert stream.write("hello world") == len("hello world")
    stream.flush()
    assert buffer.getvalue() == "hello world"


def test_file_ostream_writes_binary_as_utf8():
    buffer = io.BytesIO()
    stream = FileOStream(buffer)
    count = stream.write("héllo")
    assert buffer.getvalue() == "héllo".encode("utf-8")
    assert count == len("héllo".encode("utf-8"))


def test_file_ostream_after_close_writes_nothing():
    buffer = io.StringIO()
    stream = FileOStream(buffer)
    stream.close()
    assert buffer.closed
    assert stream.write("ignored") == 0
    stream.flush()
    stream.close()
    assert buffer.closed


def test_file_ostream_without_file():
    assert FileOStream(None).write("x") == 0


def test_std_out_and_std_err(capsys):
    out = std_out()
    err = std_err()
    out.write("to out")
    err.write("to err")
    out.flush()
    err.flush()
    captured = capsys.readouterr()
    assert captured.out == "to out"
    assert captured.err == "to err"


def test_synchronised_write_flushes_siblings_only():
    first, second, third = RecordingStream(), RecordingStream(), RecordingStream()
    wrapped = synchronise(first, second, third)
    assert len(wrapped) == 3

    assert wrapped[0].write("abc") == 3
    assert first.written == ["abc"]
    assert (first.flushes, second.flushes, third.flushes) == (0, 1, 1)

    wrapped[2].write("z")
    assert third.written == ["z"]
    assert (first.flushes, second.flushes, third.flushes) == (1, 2, 1)


def test_synchronised_flush_flushes_own_stream():
    first, second = RecordingStream(), RecordingStream()
    out, _ = synchronise(first, second)
    out.flush()
    assert (first.flushes, second.flushes) == (1, 0)


def test_synchronised_skips_vanished_sibling():
    main = RecordingStream()
    sibling = RecordingStream()
    stream = SynchronisedOStream(main, [sibling])
    del sibling
    gc.collect()
    assert stream.write("still fine") == len("still fine")
    assert main.written == ["still fine"]


def test_sink_formats_line():
    target = RecordingStream()
    sink = OStreamSink(target, Level.DEBUG, Level.FATAL)
    sink.put(make_payload())
    assert target.written == ["[2024-01-02 03:04:05] main [info]  >> hello\n"]


def test_sink_pads_thread_name():
    target = RecordingStream()
    sink = OStreamSink(target, Level.DEBUG, Level.FATAL)
    sink.put(make_payload(name="io", padding=10, level=Level.ERROR, message="bad"))
    line = target.written[0]
    assert line.startswith("[2024-01-02 03:04:05] io         [error] ")
    assert line.endswith(" >> bad\n")


@pytest.mark.parametrize(
    "level, accepted",
    [
        (Level.DEBUG, False),
        (Level.INFO, False),
        (Level.WARN, True),
        (Level.ERROR, True),
        (Level.FATAL, True),
    ],
)
def test_sink_filters_by_level(level, accepted):
    target = RecordingStream()
    sink = OStreamSink(target, Level.WARN, Level.FATAL)
    sink.put(make_payload(level=level))
    assert len(target.written) == (1 if accepted else 0)


def test_sink_upper_bound():
    target = RecordingStream()
    sink = OStreamSink(target, Level.DEBUG, Level.INFO)
    sink.put(make_payload(level=Level.WARN))
    sink.put(make_payload(level=Level.DEBUG, message="kept"))
    assert len(target.written) == 1
    assert target.written[0].endswith(">> kept\n")


def test_sink_flush_forwards():
    target = RecordingStream()
    sink = OStreamSink(target, Level.DEBUG, Level.FATAL)
    sink.flush()
    sink.flush()
    assert target.flushes == 2