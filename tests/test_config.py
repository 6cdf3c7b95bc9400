from autolights.config import REPLY_KEY, REQUEST_KEY, ConfigService
from autolights.session import Session


def _replies(session, key=REPLY_KEY):
    replies = []
    session.declare_subscriber(key, lambda s: replies.append(s.payload))
    return replies


def test_service_answers_on_source_topics():
    session = Session()
    replies = _replies(session, "autoLights/config/reply")
    ConfigService(session, 300)
    session.put("autoLights/config", "getLightShifterDelay()")
    assert replies == ["300"]


def test_default_delay_reply():
    session = Session()
    replies = _replies(session)
    ConfigService(session)
    session.put(REQUEST_KEY, "getLightShifterDelay()")
    assert replies == ["2000"]


def test_custom_delay_reply_for_any_request():
    session = Session()
    replies = _replies(session)
    ConfigService(session, 150)
    session.put(REQUEST_KEY, "anything")
    session.put(REQUEST_KEY, "")
    assert replies == ["150", "150"]


def test_changed_delay_is_used():
    session = Session()
    replies = _replies(session)
    service = ConfigService(session, 10)
    service.timer_delay = 20
    session.put(REQUEST_KEY, "x")
    assert replies == ["20"]


def test_close_stops_replies():
    session = Session()
    replies = _replies(session)
    service = ConfigService(session, 10)
    service.close()
    session.put(REQUEST_KEY, "x")
    assert replies == []