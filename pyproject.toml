[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "esimlpa"
version = "0.1.0"
description = "Local Profile Assistant commands for managing eUICC (eSIM) profiles, notifications and chip settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["esim", "euicc", "lpa", "rsp", "telephony"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
esimlpa = "esimlpa.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["esimlpa"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
