[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "giftbot"
version = "0.1.0"
description = "Giveaway bot toolkit: HTTP client, run status tracking, config discovery, backups and terminal helpers"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["giveaway", "bot", "http", "client", "cli", "backup"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
giftbot = "giftbot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["giftbot"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
