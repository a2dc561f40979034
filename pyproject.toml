[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planmon"
version = "0.1.0"
description = "A* route planning over OpenStreetMap data, plus a terminal system monitor for Linux"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "openstreetmap",
    "osm",
    "a-star",
    "route-planning",
    "pathfinding",
    "system-monitor",
    "procfs",
    "curses",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
planmon-route = "planmon.route_cli:main"
planmon-monitor = "planmon.monitor_display:main"

[tool.hatch.build.targets.wheel]
packages = ["planmon"]

[tool.hatch.build.targets.sdist]
include = [
    "planmon",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
