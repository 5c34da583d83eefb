[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysmonitor"
version = "0.1.0"
description = "Terminal system monitor for Linux showing CPU, memory, disk, network, GPU, battery and top processes"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitor", "system", "cpu", "memory", "curses", "procfs", "linux"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sysmonitor = "sysmonitor.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sysmonitor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
