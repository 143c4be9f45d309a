[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mew"
version = "0.1.0"
description = "Syntax tree, text rendering and tree passes for a module-aware WGSL dialect"
requires-python = ">=3.10"
dependencies = []
keywords = ["wgsl", "shader", "compiler", "syntax-tree", "modules"]
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
packages = ["mew"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
