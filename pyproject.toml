[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procwarden"
version = "0.1.0"
description = "Start and supervise a set of processes listed in a plain-text configuration file."
requires-python = ">=3.10"
dependencies = []
keywords = ["process", "supervisor", "respawn", "autostart", "init"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Boot :: Init",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
procwarden = "procwarden.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["procwarden"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
