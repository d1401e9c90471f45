[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tracesim"
version = "0.1.0"
description = "Trace-driven branch predictor, branch target buffer and cache simulators"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulator",
    "branch prediction",
    "perceptron",
    "branch target buffer",
    "cache",
    "computer architecture",
    "trace",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tracesim-branch = "tracesim.branch_cli:main"
tracesim-cache = "tracesim.cache_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tracesim"]

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
