"""High beams relay node: switches on command and reports its state."""

from __future__ import annotations

import argparse
import threading
from typing import Sequence

from autolights.session import Sample, Session

COMMAND_KEY = "autoLights/highBeams"
REPLY_KEY = "autoLights/highBeams/reply"


class HighBeamsService:
    """Turns the beams on for "turn on", off for anything else, and replies."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.high_beams = False
        self._subscriber = session.declare_subscriber(COMMAND_KEY, self._on_command)

    def _on_command(self, sample: Sample) -> None:
        print(f"High beams {sample.payload}", flush=True)
        self.high_beams = sample.payload == "turn on"
        self.session.put(REPLY_KEY, "on" if self.high_beams else "off")

    def close(self) -> None:
        self._subscriber.undeclare()


def main(argv: Sequence[str] | None = None) -> int:
    argparse.ArgumentParser(description="Run the high beams relay.").parse_args(argv)
    with Session() as session:
        HighBeamsService(session)
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass
    return 0