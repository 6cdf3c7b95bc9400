# autolights

Automatic high-beam control, split into small nodes that talk to each other
by publishing text messages on named keys through a `Session`.

## The nodes

| Class (module)                          | Command                    | What it does |
|-----------------------------------------|----------------------------|--------------|
| `ConfigService` (`autolights.config`)   | `autolights-config [--delay MS]` | Answers every message on `autoLights/config` with the timer delay (default 2000) on `autoLights/config/reply`. |
| `HighBeamsService` (`autolights.highbeams`) | `autolights-highbeams` | On `autoLights/highBeams`, switches on for `turn on` and off for anything else, then replies `on` or `off` on `autoLights/highBeams/reply`. |
| `FrontCameraNode` (`autolights.sensors`) | `autolights-front-camera [--delay S]` | After a delay (default 50 s) publishes `Car detected` once on `autoLights/frontCamera`. |
| `LightSensorNode` (`autolights.sensors`) | `autolights-light-sensor [--delay S]` | After a delay (default 20 s) publishes `Low light` once on `autoLights/lightSensor`. |
| `TimerService` (`autolights.timer`)     | `autolights-timer`         | On `autoLights/timer`, a number of milliseconds arms a one-shot timer and replies `Armed`; `cancel` cancels the last timer and replies `Disarmed`. When a timer runs out it replies `Timeout` on `autoLights/timer/reply`. |
| `ModeSelector` (`autolights.mode_selector`) | `autolights-mode-selector` | The controller: asks for its configuration, follows the sensors, the timer and the relay, and decides when to arm or cancel the timer and when to switch the beams. |

Each command runs until it is interrupted.

## What this package does not do

A `Session` is an in-process message router. Each command opens its own
session, so nodes started as separate commands do not exchange messages with
each other; there is no network transport. To see the nodes work together,
create them on one `Session` in one Python process, as below.

## How the mode selector decides

The selector starts uninitialized and in manual mode. When a reply arrives on
`autoLights/config/reply` it stores the delay and becomes operational. Its
decisions run whenever the camera, the light sensor or a timer timeout is
reported.

In manual mode, low light with the timer not armed and the beams off arms the
timer; while the timer is armed, bright light or a detected car cancels it.
When the timer runs out the selector switches to automatic mode and turns the
beams on.

In automatic mode, while the beams are on: bright light arms the timer if it
is not armed, low light cancels it, a detected car turns the beams off, and
`shifter_toggle` turns the beams off, returns to manual mode and cancels the
timer.

The building blocks `LightSensor`, `FrontCamera`, `ControlMode`,
`HighBeamsRelay`, `TimerState` and `ModuleState` hold the individual pieces of
state and can be used on their own.

## Using it from Python

```python
from autolights.session import Session
from autolights.config import ConfigService
from autolights.highbeams import HighBeamsService
from autolights.timer import TimerService
from autolights.mode_selector import ModeSelector
from autolights.sensors import LightSensorNode

session = Session()
config = ConfigService(session, 2000)
beams = HighBeamsService(session)
timer = TimerService(session)
selector = ModeSelector(session)
selector.start()

LightSensorNode(session).report_low_light()
```

`Session.put(key, payload)` delivers a `Sample` to every callback registered
with `declare_subscriber` for that key, in the calling thread;
`declare_publisher(key)` gives a `Publisher` bound to one key. Payloads are
`str` or UTF-8 `bytes`. A `Session` is a context manager; after `close()` it
raises `RuntimeError` on further use. Call `close()` on the services and the
session when done.

The timer can also be used on its own; the interval is in seconds:

```python
from autolights.timer import start, stop

handle = start(1.5, lambda: print("timeout"))
stop(handle)
```

## Tests

```
pip install -e .[test]
pytest
```