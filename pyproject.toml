[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parkingsim"
version = "0.1.0"
description = "Smart parking lot simulator with an HTTP API, an in-memory OLED frame buffer and a 5x5 LED matrix buffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["parking", "simulator", "http", "ssd1306", "led-matrix", "iot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parkingsim = "parkingsim.server:main"

[tool.hatch.build.targets.wheel]
packages = ["parkingsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
