[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stacklatex"
version = "0.1.0"
description = "Rewrite LaTeX into a form that Moodle STACK questions accept"
requires-python = ">=3.10"
dependencies = []
keywords = ["latex", "moodle", "stack", "mathjax", "html"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Text Processing :: Markup :: LaTeX",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stacklatex = "stacklatex.desktop:main"

[tool.hatch.build.targets.wheel]
packages = ["stacklatex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
