[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kommito"
version = "0.1.0"
description = "A lightweight version control system with staging, commits, branches, merge, checkout and clone"
requires-python = ">=3.10"
dependencies = []
keywords = ["version control", "vcs", "commit", "branch", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kommito = "kommito.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["kommito"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
