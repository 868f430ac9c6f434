[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cellplace"
version = "0.1.0"
description = "Row-based standard-cell placement: width-ordered placement, greedy swapping, simulated annealing and legalization"
requires-python = ">=3.10"
dependencies = []
keywords = ["placement", "standard cell", "vlsi", "eda", "simulated annealing", "hpwl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cellplace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
