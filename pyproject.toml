[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slashlib"
version = "0.1.0"
description = "Building blocks for a small scripting web runtime: class model, CGI/FastCGI request handling, codecs, digests, inflection and sockets"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cgi",
    "fastcgi",
    "http",
    "base64",
    "json",
    "digest",
    "inflection",
    "pluralize",
    "sockets",
    "object model",
]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slashlib"]

[tool.hatch.build.targets.sdist]
include = ["slashlib", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
