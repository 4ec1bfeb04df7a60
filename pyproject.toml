[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gradle-depcheck"
version = "0.1.0"
description = "Analyse Gradle dependency trees: conflicts, risk levels, duplicates, scope problems and diffs"
requires-python = ">=3.10"
dependencies = []
keywords = ["gradle", "dependencies", "dependency-tree", "conflicts", "build"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gradle_depcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
