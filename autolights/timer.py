"""Timer node: arms one-shot timers on request and reports their outcome."""

from __future__ import annotations

import argparse
import threading
from typing import Callable, Sequence

from autolights.session import Sample, Session

REQUEST_KEY = "autoLights/timer"
REPLY_KEY = "autoLights/timer/reply"
CANCEL = "cancel"


class TimerHandle:
    """A one-shot timer running on a daemon thread; cancel it to suppress the call."""

    def __init__(self, interval: float, timeout: Callable[[], None]) -> None:
        self.interval = interval
        self._timeout = timeout
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self) -> None:
        if not self._cancelled.wait(self.interval):
            self._timeout()

    @property
    def running(self) -> bool:
        return not self._cancelled.is_set()

    def cancel(self) -> None:
        """Prevent the timeout from firing if it has not yet."""
        self._cancelled.set()

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)


def start(interval: float, timeout: Callable[[], None]) -> TimerHandle:
    """Call ``timeout`` after ``interval`` seconds unless cancelled first."""
    handle = TimerHandle(interval, timeout)
    handle._thread.start()
    return handle


def stop(handle: TimerHandle | None) -> None:
    """Cancel ``handle`` if there is one."""
    if handle is not None:
        handle.cancel()


class TimerService:
    """Arms a timer for each millisecond count received; "cancel" stops the last one."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.handle: TimerHandle | None = None
        self._subscriber = session.declare_subscriber(REQUEST_KEY, self._on_request)

    def _on_timeout(self) -> None:
        self.session.put(REPLY_KEY, "Timeout")
        print("Timeout", flush=True)

    def _on_request(self, sample: Sample) -> None:
        message = sample.payload
        if message == CANCEL:
            print("Timer cancelled", flush=True)
            stop(self.handle)
            self.session.put(REPLY_KEY, "Disarmed")
            return
        milliseconds = int(message)
        self.handle = start(milliseconds / 1000, self._on_timeout)
        self.session.put(REPLY_KEY, "Armed")
        print("Timer armed", flush=True)

    def close(self) -> None:
        """Stop handling requests and cancel the pending timer."""
        self._subscriber.undeclare()
        stop(self.handle)


def main(argv: Sequence[str] | None = None) -> int:
    argparse.ArgumentParser(description="Run the timer node.").parse_args(argv)
    with Session() as session:
        service = TimerService(session)
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass
        finally:
            service.close()
    return 0