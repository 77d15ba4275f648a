import threading
import time

from venue_menu.core.debounce import Debouncer


class FakeTimer:
    """Stands in for threading.Timer; tests fire it explicitly."""

    created = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.cancelled = False
        self.started = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


def make_debouncer(calls):
    FakeTimer.created = []
    return Debouncer(0.25, calls.append, timer_factory=FakeTimer)


def test_only_last_call_reaches_callback():
    calls = []
    debounce = make_debouncer(calls)
    for text in ("m", "mo", "moj"):
        debounce(text)
    assert [t.cancelled for t in FakeTimer.created] == [True, True, False]
    FakeTimer.created[-1].fire()
    assert calls == ["moj"]
    assert not debounce.pending


def test_stale_timer_does_not_fire_newer_value():
    calls = []
    debounce = make_debouncer(calls)
    debounce("m")
    debounce("mo")
    # a cancelled timer that was already running still checks its generation
    FakeTimer.created[0].fire()
    assert calls == []
    FakeTimer.created[1].fire()
    assert calls == ["mo"]


def test_flush_runs_pending_call_immediately():
    calls = []
    debounce = make_debouncer(calls)
    debounce("moj")
    debounce.flush()
    assert calls == ["moj"]
    assert FakeTimer.created[-1].cancelled


def test_cancel_drops_pending_call():
    calls = []
    debounce = make_debouncer(calls)
    debounce("moj")
    debounce.cancel()
    FakeTimer.created[-1].fire()
    assert calls == []


def test_real_timer_coalesces_rapid_calls():
    calls = []
    done = threading.Event()

    def record(value):
        calls.append(value)
        done.set()

    debounce = Debouncer(0.2, record)
    for text in ("m", "mo", "moj"):
        debounce(text)
        time.sleep(0.02)
    assert done.wait(2.0)
    time.sleep(0.3)
    assert calls == ["moj"]
