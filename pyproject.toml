[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpcbatch"
version = "0.1.0"
description = "JSON-RPC 2.0 message types, batch decoding and dispatch of requests, notifications and responses"
requires-python = ">=3.10"
dependencies = []
keywords = ["json-rpc", "jsonrpc", "rpc", "batch", "dispatch", "protocol"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rpcbatch"]

[tool.hatch.build.targets.sdist]
include = ["rpcbatch", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
