[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minimapreduce"
version = "1.0.0"
description = "A small in-process MapReduce engine with a coordinator, worker threads and a word-count application"
requires-python = ">=3.10"
dependencies = []
keywords = ["mapreduce", "word-count", "coordinator", "worker", "threads"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minimapreduce = "minimapreduce.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minimapreduce"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
