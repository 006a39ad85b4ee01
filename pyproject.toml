[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "odyc-cli"
version = "0.1.0"
description = "Command-line helpers for Odyc.js developers: generate game configuration from sprite images"
requires-python = ">=3.10"
keywords = ["odyc", "sprites", "pixel-art", "code-generation", "game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
odyc-cli = "odyc_cli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["odyc_cli"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
