[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexcells-solver"
version = "0.1.0"
description = "Step-by-step logical solver and difficulty estimator for Hexcells puzzle levels"
requires-python = ">=3.10"
dependencies = []
keywords = ["hexcells", "puzzle", "solver", "hexagon", "logic"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hexcells-solver = "hexcells_solver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hexcells_solver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
