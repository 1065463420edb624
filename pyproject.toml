[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "islandmerge"
version = "0.1.0"
description = "Island-connecting puzzle game logic: boards, bridges, levels, achievements, editor and saves"
requires-python = ">=3.10"
dependencies = []
keywords = ["puzzle", "game", "islands", "bridges", "union-find", "level-editor"]
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
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["islandmerge"]

[tool.hatch.build.targets.sdist]
include = ["islandmerge", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
