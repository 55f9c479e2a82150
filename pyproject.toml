[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpcgbench"
version = "0.8.9"
description = "Building blocks of the High Performance Conjugate Gradient benchmark: geometry, vectors, sparse matrices, ELL storage, parameter parsing and YAML reports"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "hpcg",
    "benchmark",
    "conjugate-gradient",
    "sparse-matrix",
    "ell",
    "yaml-report",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hpcgbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
