import threading

import pytest

from autolights.session import Session
from autolights.timer import REPLY_KEY, REQUEST_KEY, TimerService, start, stop


def test_start_fires_timeout():
    fired = threading.Event()
    handle = start(0.01, fired.set)
    assert fired.wait(2)
    assert handle.running


def test_stop_prevents_timeout():
    fired = threading.Event()
    handle = start(0.2, fired.set)
    stop(handle)
    handle.join(2)
    assert not fired.is_set()
    assert handle.running is False


def test_cancel_method():
    fired = threading.Event()
    handle = start(0.2, fired.set)
    handle.cancel()
    handle.join(2)
    assert not fired.is_set()


@pytest.fixture
def rig():
    session = Session()
    replies = []
    got_timeout = threading.Event()

    def on_reply(sample):
        replies.append(sample.payload)
        if sample.payload == "Timeout":
            got_timeout.set()

    session.declare_subscriber(REPLY_KEY, on_reply)
    return session, TimerService(session), replies, got_timeout


def test_cancel_replies_disarmed(rig, capsys):
    session, _, replies, _ = rig
    session.put(REQUEST_KEY, "cancel")
    assert replies == ["Disarmed"]
    assert capsys.readouterr().out == "Timer cancelled\n"


def test_arm_then_timeout(rig):
    session, _, replies, got_timeout = rig
    session.put(REQUEST_KEY, "10")
    assert got_timeout.wait(2)
    assert replies == ["Armed", "Timeout"]


def test_arm_then_cancel(rig):
    session, service, replies, got_timeout = rig
    session.put(REQUEST_KEY, "200")
    session.put(REQUEST_KEY, "cancel")
    service.handle.join(2)
    assert not got_timeout.is_set()
    assert replies == ["Armed", "Disarmed"]


def test_invalid_delay_raises(rig):
    session, _, replies, _ = rig
    with pytest.raises(ValueError):
        session.put(REQUEST_KEY, "soon")
    assert replies == []


def test_close_cancels_pending(rig):
    session, service, replies, got_timeout = rig
    session.put(REQUEST_KEY, "200")
    service.close()
    service.handle.join(2)
    session.put(REQUEST_KEY, "cancel")
    assert not got_timeout.is_set()
    assert replies == ["Armed"]