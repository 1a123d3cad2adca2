[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xarkit"
version = "1.7.0"
description = "Building blocks for the xar archive format: header, table of contents, options, data sources and sinks, bzip2 encoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["xar", "archive", "toc", "bzip2", "checksum", "base64"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xarkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
