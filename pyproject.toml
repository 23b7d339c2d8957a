[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nbastatsfeed"
version = "0.1.0"
description = "Poll NBA player speed and distance statistics as records, and export them to CSV."
requires-python = ">=3.10"
keywords = ["nba", "statistics", "basketball", "data-pipeline", "connector", "csv"]
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
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
nbastatsfeed-export = "nbastatsfeed.export:main"

[tool.hatch.build.targets.wheel]
packages = ["nbastatsfeed"]

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
