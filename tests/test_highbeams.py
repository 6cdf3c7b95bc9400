import pytest

from autolights.highbeams import COMMAND_KEY, REPLY_KEY, HighBeamsService
from autolights.session import Session


@pytest.fixture
def rig():
    session = Session()
    replies = []
    session.declare_subscriber(REPLY_KEY, lambda s: replies.append(s.payload))
    return session, HighBeamsService(session), replies


def test_initially_off(rig):
    _, service, replies = rig
    assert service.high_beams is False
    assert replies == []


def test_turn_on(rig):
    session, service, replies = rig
    session.put(COMMAND_KEY, "turn on")
    assert service.high_beams is True
    assert replies == ["on"]


def test_turn_off_and_unknown(rig):
    session, service, replies = rig
    session.put(COMMAND_KEY, "turn on")
    session.put(COMMAND_KEY, "turn off")
    session.put(COMMAND_KEY, "gibberish")
    assert service.high_beams is False
    assert replies == ["on", "off", "off"]


def test_prints_command(rig, capsys):
    session, _, _ = rig
    session.put(COMMAND_KEY, "turn on")
    assert capsys.readouterr().out == "High beams turn on\n"


def test_close(rig):
    session, service, replies = rig
    service.close()
    session.put(COMMAND_KEY, "turn on")
    assert replies == []
    assert service.high_beams is False