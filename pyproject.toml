[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oneclicker"
version = "0.1.3"
description = "A small incremental clicker game: click for coins, then build machines that mine, move, add and multiply them."
requires-python = ">=3.10"
keywords = ["game", "clicker", "incremental", "idle", "pygame", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
oneclicker = "oneclicker.game:main"

[tool.hatch.build.targets.wheel]
packages = ["oneclicker"]

[tool.hatch.build.targets.sdist]
include = ["oneclicker", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
