[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nealife"
version = "0.1.0"
description = "A grid-based artificial life simulation in which organisms move, eat, reproduce and mutate, with SQLite save and load."
requires-python = ">=3.10"
dependencies = []
keywords = ["artificial life", "simulation", "cellular automaton", "organisms", "evolution"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nealife = "nealife.app:main"

[tool.hatch.build.targets.wheel]
packages = ["nealife"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
