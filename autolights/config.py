"""Configuration node: answers delay requests with the timer delay."""

from __future__ import annotations

import argparse
import threading
from typing import Sequence

from autolights.session import Sample, Session

REQUEST_KEY = "autoLights/config"
REPLY_KEY = "autoLights/config/reply"
DEFAULT_TIMER_DELAY = 2000


class ConfigService:
    """Replies to every config request with the timer delay in milliseconds."""

    def __init__(self, session: Session, timer_delay: int = DEFAULT_TIMER_DELAY) -> None:
        self.session = session
        self.timer_delay = timer_delay
        self._subscriber = session.declare_subscriber(REQUEST_KEY, self._on_request)

    def _on_request(self, sample: Sample) -> None:
        self.session.put(REPLY_KEY, str(self.timer_delay))

    def close(self) -> None:
        self._subscriber.undeclare()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the light shifter delay.")
    parser.add_argument("--delay", type=int, default=DEFAULT_TIMER_DELAY)
    args = parser.parse_args(argv)
    with Session() as session:
        ConfigService(session, args.delay)
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass
    return 0