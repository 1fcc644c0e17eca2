[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xeol"
version = "0.1.0"
description = "End-of-life lookups for packages and Linux distributions: distro and CPE helpers, EOL records, matches and database listings"
requires-python = ">=3.11"
dependencies = []
keywords = ["eol", "end-of-life", "purl", "cpe", "linux", "distro", "security"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xeol"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
