[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corelab"
version = "0.1.0"
description = "Building blocks for Core War experiments: Redcode instructions, battle scoring, and small networking and integer utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "core war",
    "redcode",
    "fitness",
    "echo server",
    "iterators",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
corelab-echo-server = "corelab.echo_server:main"
corelab-flood = "corelab.flood_client:main"

[tool.hatch.build.targets.wheel]
packages = ["corelab"]

[tool.hatch.build.targets.sdist]
include = [
    "corelab",
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
