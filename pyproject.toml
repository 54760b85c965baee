[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weatherstats"
version = "0.1.0"
description = "Fetch historical hourly weather for a list of cities and find the warmest, sunniest and foggiest ones."
requires-python = ">=3.10"
dependencies = []
keywords = ["weather", "open-meteo", "producer-consumer", "concurrency", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
weatherstats = "weatherstats.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["weatherstats"]

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
warn_redundant_casts = true
