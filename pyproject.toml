[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "watchlist"
version = "0.0.1"
description = "Device watchlist storage on SQLite, with thread-pool and event-loop concurrency utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "watchlist",
    "sqlite",
    "devices",
    "thread-pool",
    "event-loop",
    "concurrency",
    "logging",
]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
watchlist = "watchlist.app:main"
watchlist-logger = "watchlist.logger:main"
watchlist-concurrency-examples = "watchlist.examples:main"
watchlist-multithread-demo = "watchlist.multithread_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["watchlist"]

[tool.hatch.build.targets.sdist]
include = ["watchlist", "tests", "README.md", "pyproject.toml"]

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
