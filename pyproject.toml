[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fetchwire"
version = "0.1.0"
description = "A small HTTP client with fluent request building, default headers, multipart forms and typed errors."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "client", "request", "multipart", "headers"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fetchwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
