"""Simulated front camera and light sensor nodes."""

from __future__ import annotations

import argparse
import threading
from typing import Sequence

from autolights.session import Session

FRONT_CAMERA_KEY = "autoLights/frontCamera"
LIGHT_SENSOR_KEY = "autoLights/lightSensor"
CAR_DETECTED = "Car detected"
LOW_LIGHT = "Low light"


class _ReportingNode:
    key = ""
    message = ""
    initial_delay = 0.0

    def __init__(self, session: Session) -> None:
        self.publisher = session.declare_publisher(self.key)

    def _report(self) -> None:
        self.publisher.put(self.message)
        print(self.message, flush=True)

    def run(self, initial_delay: float | None = None,
            stop_event: threading.Event | None = None) -> None:
        """Wait, report once, then idle until ``stop_event`` is set (or forever)."""
        stop_event = stop_event or threading.Event()
        delay = self.initial_delay if initial_delay is None else initial_delay
        if stop_event.wait(delay):
            return
        self._report()
        stop_event.wait()


class FrontCameraNode(_ReportingNode):
    """Publishes a single "Car detected" after a start-up delay."""

    key = FRONT_CAMERA_KEY
    message = CAR_DETECTED
    initial_delay = 50.0

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def report_car_detected(self) -> None:
        self._report()

    def run(self, initial_delay: float | None = None,
            stop_event: threading.Event | None = None) -> None:
        super().run(initial_delay, stop_event)


class LightSensorNode(_ReportingNode):
    """Publishes a single "Low light" after a start-up delay."""

    key = LIGHT_SENSOR_KEY
    message = LOW_LIGHT
    initial_delay = 20.0

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def report_low_light(self) -> None:
        self._report()

    def run(self, initial_delay: float | None = None,
            stop_event: threading.Event | None = None) -> None:
        super().run(initial_delay, stop_event)


def _main(node_type: type[_ReportingNode], argv: Sequence[str] | None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=node_type.initial_delay)
    args = parser.parse_args(argv)
    with Session() as session:
        try:
            node_type(session).run(args.delay)
        except KeyboardInterrupt:
            pass
    return 0


def front_camera_main(argv: Sequence[str] | None = None) -> int:
    return _main(FrontCameraNode, argv)


def light_sensor_main(argv: Sequence[str] | None = None) -> int:
    return _main(LightSensorNode, argv)