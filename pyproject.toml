[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gocu"
version = "0.1.0"
description = "A small command-line HTTP client with reusable placeholder variables"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "client", "cli", "curl", "rest", "json", "variables"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gocu = "gocu.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gocu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
