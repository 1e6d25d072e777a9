[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfgraph"
version = "0.1.0"
description = "PDF object values, ToUnicode CMaps, PNG predictors, PDF dates and page-range helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "cmap", "tounicode", "png-predictor", "pdf-date", "page-ranges"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: File Formats",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pdfgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
