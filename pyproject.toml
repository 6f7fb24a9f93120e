[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "texted"
version = "0.1.0"
description = "Parse, evaluate and write small Lisp-like text editing scripts"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "editor", "scripting", "lisp", "s-expression", "json"]
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
    "Topic :: Text Editors :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["texted"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
