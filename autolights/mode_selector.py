"""Mode selector: decides when the high beams go on or off, automatically or by hand."""

from __future__ import annotations

import argparse
import threading
from enum import Enum
from typing import Callable, Optional, Sequence

from autolights.session import Sample, Session

FRONT_CAMERA_KEY = "autoLights/frontCamera"
LIGHT_SENSOR_KEY = "autoLights/lightSensor"
TIMER_KEY = "autoLights/timer"
TIMER_REPLY_KEY = "autoLights/timer/reply"
HIGH_BEAMS_KEY = "autoLights/highBeams"
HIGH_BEAMS_REPLY_KEY = "autoLights/highBeams/reply"
CONFIG_KEY = "autoLights/config"
CONFIG_REPLY_KEY = "autoLights/config/reply"
CONFIG_REQUEST = "getLightShifterDelay()"

OnChange = Optional[Callable[[], None]]


def _notify(on_change: OnChange) -> None:
    if on_change is not None:
        on_change()


class LightLevel(Enum):
    LOW = "Low"
    HIGH = "High"


class CameraState(Enum):
    DETECTED = "Detected"
    NOT_DETECTED = "NotDetected"


class Mode(Enum):
    AUTOMATIC = "Automatic"
    MANUAL = "Manual"


class RelayState(Enum):
    ON = "On"
    OFF = "Off"


class ModuleStatus(Enum):
    UNINITIALIZED = "Uninitialized"
    OPERATIONAL = "Operational"


class LightSensor:
    """Last reported ambient light level; starts high."""

    def __init__(self) -> None:
        self.state = LightLevel.HIGH

    def set_state(self, state: LightLevel, on_change: OnChange = None) -> None:
        print(f"Changing LightSensor state to {state.value}", flush=True)
        self.state = state
        _notify(on_change)

    def is_low(self) -> bool:
        return self.state is LightLevel.LOW


class FrontCamera:
    """Whether a car ahead is detected; unknown messages are ignored."""

    def __init__(self) -> None:
        self.state = CameraState.NOT_DETECTED

    def set_state(self, message: str, on_change: OnChange = None) -> None:
        if message == "Car detected":
            self.state = CameraState.DETECTED
        elif message == "Car passed":
            self.state = CameraState.NOT_DETECTED
        else:
            return
        print(message, flush=True)
        _notify(on_change)

    def is_car_detected(self) -> bool:
        return self.state is CameraState.DETECTED


class ControlMode:
    """Manual or automatic control; starts manual."""

    def __init__(self) -> None:
        self.mode = Mode.MANUAL

    def change_mode(self, mode: Mode, on_change: OnChange = None) -> None:
        print(f"Changing mode to {mode.value}", flush=True)
        self.mode = mode
        _notify(on_change)

    def is_manual(self) -> bool:
        return self.mode is Mode.MANUAL

    def is_automatic(self) -> bool:
        return self.mode is Mode.AUTOMATIC


class HighBeamsRelay:
    """Last reported state of the high beams relay; starts off."""

    def __init__(self) -> None:
        self.state = RelayState.OFF

    def set_state(self, state: RelayState, on_change: OnChange = None) -> None:
        print(f"Changing High Beams Relay state to {state.value}", flush=True)
        self.state = state
        _notify(on_change)

    def is_on(self) -> bool:
        return self.state is RelayState.ON


class TimerState:
    """Tracks the timer node's replies: armed, disarmed and timeout."""

    def __init__(self) -> None:
        self.armed = False
        self.timeout = False

    def is_armed(self) -> bool:
        return self.armed

    def is_timeout(self) -> bool:
        return self.timeout

    def set_armed(self, message: str, on_change: OnChange = None) -> None:
        if message == "Armed":
            print("Arming timer", flush=True)
            self.armed = True
            _notify(on_change)
        elif message == "Disarmed":
            print("Timer disarmed/cancelled", flush=True)
            self.armed = False

    def set_timeout(self, message: str, on_change: OnChange = None) -> None:
        """On "Timeout", flag the timeout only while ``on_change`` runs, then disarm."""
        if message == "Timeout":
            print("Timer timeout", flush=True)
            self.timeout = True
            _notify(on_change)
            self.timeout = False
            self.armed = False


class ModuleState:
    """Whether the module has received its configuration."""

    def __init__(self) -> None:
        self.state = ModuleStatus.UNINITIALIZED

    def set_state(self, state: ModuleStatus, on_change: OnChange = None) -> None:
        self.state = state
        _notify(on_change)

    def is_operational(self) -> bool:
        return self.state is ModuleStatus.OPERATIONAL

    def is_uninitialized(self) -> bool:
        return self.state is ModuleStatus.UNINITIALIZED


class ModeSelector:
    """Listens to the sensors, timer and relay and issues timer and beam commands."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.timer_delay = 0
        self.mode = ControlMode()
        self.module = ModuleState()
        self.timer = TimerState()
        self.light_sensor = LightSensor()
        self.front_camera = FrontCamera()
        self.high_beams_relay = HighBeamsRelay()
        self.low_light = False
        self.shifter_toggle = False
        self.module_terminate = False
        self._subscribers = [
            session.declare_subscriber(FRONT_CAMERA_KEY, self._on_camera),
            session.declare_subscriber(TIMER_REPLY_KEY, self._on_timer),
            session.declare_subscriber(LIGHT_SENSOR_KEY, self._on_light),
            session.declare_subscriber(HIGH_BEAMS_REPLY_KEY, self._on_high_beams),
            session.declare_subscriber(CONFIG_REPLY_KEY, self._on_config),
        ]

    def _trace(self, text: str) -> None:
        print(text, end="", flush=True)

    def _cancel_timer(self) -> None:
        self.session.put(TIMER_KEY, "cancel")

    def _arm_timer(self) -> None:
        self.session.put(TIMER_KEY, str(self.timer_delay))

    def toggle_beams(self) -> None:
        """Ask the relay for the opposite of its last reported state."""
        command = "turn off" if self.high_beams_relay.is_on() else "turn on"
        self.session.put(HIGH_BEAMS_KEY, command)
        self.shifter_toggle = False

    def state_logic(self) -> None:
        """Evaluate the current state and issue the commands it calls for."""
        if not self.module.is_operational():
            if self.shifter_toggle:
                self._cancel_timer()
                self.toggle_beams()
            return

        self._trace("Operational, ")
        if self.mode.is_manual():
            self._manual_logic()
        else:
            self._automatic_logic()
        print(flush=True)

    def _manual_logic(self) -> None:
        self._trace("Manual, ")
        if not self.timer.is_armed():
            self._trace("Not armed, ")
            if self.light_sensor.is_low():
                self._trace("Low light, ")
                if not self.high_beams_relay.is_on():
                    self._trace("High beams off, ")
                    self._arm_timer()
        else:
            self._trace("Armed, ")
            if not self.light_sensor.is_low():
                self._trace("High light, ")
                self._cancel_timer()
            if self.front_camera.is_car_detected():
                self._trace("Car detected, ")
                self._cancel_timer()
        if self.timer.is_timeout():
            self._trace("Timeout, ")
            self.mode.change_mode(Mode.AUTOMATIC)
            self.session.put(HIGH_BEAMS_KEY, "turn on")
            self.low_light = True
        if self.shifter_toggle:
            self._trace("Shifter toggle, ")
            self._cancel_timer()
            self.toggle_beams()

    def _automatic_logic(self) -> None:
        self._trace("Automatic, ")
        if self.high_beams_relay.is_on():
            self._trace("High beams on, ")
            if not self.light_sensor.is_low():
                self._trace("High light, ")
                if not self.timer.is_armed():
                    self._trace("Timer not armed, ")
                    self._arm_timer()
            if self.light_sensor.is_low():
                self._trace("Low light, ")
                self._cancel_timer()
            if self.front_camera.is_car_detected():
                self._trace("Car detected, ")
                self.session.put(HIGH_BEAMS_KEY, "turn off")
            if self.shifter_toggle:
                self._trace("Shifter toggled, ")
                self.session.put(HIGH_BEAMS_KEY, "turn off")
                self.mode.change_mode(Mode.MANUAL)
                self._cancel_timer()
        if self.low_light:
            self._trace("Low light (var), ")
            if self.timer.is_timeout():
                self._trace("Timeout, ")
                self.low_light = not self.low_light
                self.toggle_beams()
        if not self.low_light:
            self._trace("High light(var), ")
            if self.timer.is_timeout():
                self._trace("Timeout, ")
                self.low_light = not self.low_light
                self.toggle_beams()
        if self.module_terminate:
            self._trace("Terminate, ")
            self.mode.change_mode(Mode.MANUAL)
            self._cancel_timer()

    def _on_camera(self, sample: Sample) -> None:
        self.front_camera.set_state(sample.payload, self.state_logic)

    def _on_timer(self, sample: Sample) -> None:
        self.timer.set_armed(sample.payload)
        self.timer.set_timeout(sample.payload, self.state_logic)

    def _on_light(self, sample: Sample) -> None:
        level = LightLevel.LOW if sample.payload == "Low light" else LightLevel.HIGH
        self.light_sensor.set_state(level, self.state_logic)

    def _on_high_beams(self, sample: Sample) -> None:
        state = RelayState.ON if sample.payload == "on" else RelayState.OFF
        self.high_beams_relay.set_state(state)

    def _on_config(self, sample: Sample) -> None:
        self.timer_delay = int(sample.payload)
        print(f"Received delay {self.timer_delay}", flush=True)
        self.module.set_state(ModuleStatus.OPERATIONAL)

    def start(self) -> None:
        """Request the timer delay from the config node."""
        self.session.put(CONFIG_KEY, CONFIG_REQUEST)

    def close(self) -> None:
        """Stop listening to every topic."""
        for subscriber in self._subscribers:
            subscriber.undeclare()
        self._subscribers.clear()


def main(argv: Sequence[str] | None = None) -> int:
    argparse.ArgumentParser(description="Run the high beams mode selector.").parse_args(argv)
    with Session() as session:
        selector = ModeSelector(session)
        selector.start()
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass
        finally:
            selector.close()
    return 0