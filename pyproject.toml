[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hsrg"
version = "0.1.0"
description = "Single-lane rhythm game core: beatmap timing, note judgement and a beat timeline editor model"
requires-python = ">=3.10"
dependencies = []
keywords = ["rhythm", "game", "beatmap", "bpm", "timing", "editor"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hsrg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
