import errno
import os
import threading

import pytest

from lambdaengine import log
from lambdaengine.errors import ExpectationError, LambdaError, SystemFailure, expect


class RecordingSink(log.Sink):
    def __init__(self):
        self.payloads = []

    def put(self, payload):
        self.payloads.append(payload)

    def flush(self):
        pass


@pytest.fixture
def sink():
    log.clear_sinks()
    recording = RecordingSink()
    log.add_sink(recording)
    yield recording
    log.clear_sinks()


def test_system_failure_message_and_code():
    failure = SystemFailure(errno.ENOENT, "opening config")
    assert failure.error_code == errno.ENOENT
    assert str(failure) == f"System error ({os.strerror(errno.ENOENT)}): opening config"
    assert str(failure).startswith("System error (")


def test_system_failure_is_lambda_error():
    failure = SystemFailure(errno.EACCES, "denied")
    with pytest.raises(LambdaError) as info:
        raise failure
    assert info.value.error_code == errno.EACCES
    assert str(info.value) == f"System error ({os.strerror(errno.EACCES)}): denied"


def test_expect_false_raises_with_formatted_message(sink):
    with pytest.raises(ExpectationError) as info:
        expect(False, "value {} out of range {}", 7, "[0, 5)")
    assert str(info.value) == "value 7 out of range [0, 5)"


def test_expect_false_logs_fatal(sink):
    with pytest.raises(ExpectationError):
        expect(0, "broken invariant")
    assert [p.level for p in sink.payloads] == [log.Level.FATAL]
    assert sink.payloads[0].message == "broken invariant"


def test_expect_true_logs_nothing(sink):
    result = expect(True, "never shown {}", 1)
    assert result is None
    assert sink.payloads == []


def test_expectation_error_is_lambda_error():
    assert issubclass(ExpectationError, LambdaError)
    with pytest.raises(LambdaError):
        done = threading.Event()
        expect(done.is_set(), "event not set")