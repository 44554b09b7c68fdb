[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diffmerge"
version = "0.1.0"
description = "Line-based O(NP) diff engine with slider-placement heuristics and a corpus evaluation tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["diff", "onp", "slider", "heuristics", "text", "lines"]
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
    "Topic :: Text Processing :: General",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slider-eval = "diffmerge.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["diffmerge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
