[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eulerdg"
version = "0.1.0"
description = "Building blocks for a discontinuous Galerkin / flux reconstruction solver of the 2D Euler equations"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "cfd",
    "euler",
    "discontinuous-galerkin",
    "flux-reconstruction",
    "riemann-solver",
    "gas-dynamics",
    "shock-sensor",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["eulerdg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
