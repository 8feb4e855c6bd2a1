[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "astikit"
version = "0.1.0"
description = "Small utilities: bit writing, byte iteration, padding, rationals, events, limiters, pipes, zip archives and shared memory."
requires-python = ">=3.10"
dependencies = []
keywords = ["utilities", "bits", "bytes", "zip", "shared-memory", "events", "limiter", "pipe"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["astikit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
