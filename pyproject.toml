[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lcuhelper"
version = "0.1.0"
description = "Helpers for the League of Legends client: async API client, event stream, premade analysis, player scoring and overlay geometry"
requires-python = ">=3.10"
keywords = ["league-of-legends", "lcu", "automation", "premade", "match-history"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "httpx>=0.24",
    "websockets>=13",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
]

[tool.hatch.build.targets.wheel]
packages = ["lcuhelper"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
