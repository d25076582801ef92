[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softlang"
version = "0.1.0"
description = "Syntax tree, bytecode model and multi-pass compiler for the Soft programming language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "bytecode", "ast", "programming-language", "soft"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["softlang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
