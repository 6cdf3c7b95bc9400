[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "autolights"
version = "0.1.0"
description = "Automatic high-beam control built from small publish/subscribe nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["automotive", "high beams", "publish-subscribe", "state machine", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
autolights-config = "autolights.config:main"
autolights-highbeams = "autolights.highbeams:main"
autolights-front-camera = "autolights.sensors:front_camera_main"
autolights-light-sensor = "autolights.sensors:light_sensor_main"
autolights-timer = "autolights.timer:main"
autolights-mode-selector = "autolights.mode_selector:main"

[tool.hatch.build.targets.wheel]
packages = ["autolights"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
