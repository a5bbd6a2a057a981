import pytest

from lambdaengine.window import (
    Window,
    WindowConfig,
    WindowMode,
    WindowQuitEvent,
)


def make_window(mode=WindowMode.WINDOWED):
    return Window(WindowConfig(height=720, width=1080, title="Lambda :3", start_mode=mode))


@pytest.mark.parametrize("mode", list(WindowMode))
def test_start_mode_is_applied(mode):
    assert make_window(mode).mode is mode


def test_config_is_kept():
    window = make_window()
    assert window.config.title == "Lambda :3"
    assert (window.config.width, window.config.height) == (1080, 720)


def test_set_mode_switches_and_back():
    window = make_window()
    window.set_mode(WindowMode.FULLSCREEN)
    assert window.mode is WindowMode.FULLSCREEN
    window.set_mode(WindowMode.FULLSCREEN)
    assert window.mode is WindowMode.FULLSCREEN
    window.set_mode(WindowMode.WINDOWED)
    assert window.mode is WindowMode.WINDOWED


def test_events_delivered_in_order():
    window = make_window()
    first, second = WindowQuitEvent(), WindowQuitEvent()
    received = []
    window.set_event_handler(lambda event: received.append(event) or True)
    window.post_event(first)
    window.post_event(second)
    window.process_events()
    assert len(received) == 2
    assert received[0] is first and received[1] is second


def test_events_wait_without_handler():
    window = make_window()
    event = WindowQuitEvent()
    window.post_event(event)
    window.process_events()

    received = []
    window.set_event_handler(lambda e: received.append(e) or True)
    window.process_events()
    assert received == [event]


def test_handler_returning_false_stops_processing():
    window = make_window()
    posted = [WindowQuitEvent() for _ in range(3)]
    for event in posted:
        window.post_event(event)

    calls = []

    def handler(event):
        calls.append(event)
        return False

    window.set_event_handler(handler)
    window.process_events()
    assert len(calls) == 1
    assert calls[0] is posted[0]
    window.process_events()
    assert len(calls) == 2
    assert calls[1] is posted[1]


def test_quit_loop_like_runtime():
    window = make_window()
    state = {"running": True}
    received = []

    def handler(event):
        received.append(event)
        if isinstance(event, WindowQuitEvent):
            state["running"] = False
        return state["running"]

    window.set_event_handler(handler)
    window.process_events()
    assert received == []
    assert state["running"] is True
    quit_event = WindowQuitEvent()
    window.post_event(quit_event)
    window.process_events()
    assert len(received) == 1
    assert received[0] is quit_event
    assert state["running"] is False


def test_removing_handler():
    window = make_window()
    received = []
    window.set_event_handler(lambda e: received.append(e) or True)
    window.set_event_handler(None)
    window.post_event(WindowQuitEvent())
    window.process_events()
    assert received == []


def test_delivered_quit_event_equals_fresh_one():
    window = make_window()
    received = []
    window.set_event_handler(lambda e: received.append(e) or True)
    window.post_event(WindowQuitEvent())
    window.process_events()
    assert received == [WindowQuitEvent()]