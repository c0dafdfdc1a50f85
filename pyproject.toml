[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fpcli"
version = "0.1.0"
description = "Building blocks for a notebook command-line client: log parsing, timestamps, notebook URLs, config files and table/JSON output"
requires-python = ">=3.11"
dependencies = [
    "platformdirs",
    "tomli-w",
]
keywords = [
    "notebooks",
    "cli",
    "logs",
    "log-parsing",
    "timestamps",
    "observability",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: System :: Logging",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fpcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
