[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lambdaengine"
version = "0.1.0"
description = "Core building blocks for a small real-time engine: logging, streams, vectors, arenas, a thread pool, cooperative tasks, a window event queue and a command-buffer renderer."
requires-python = ">=3.10"
dependencies = []
keywords = ["engine", "game", "logging", "vector", "arena", "thread-pool", "coroutines", "renderer"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lambdaengine"]

[tool.pytest.ini_options]
addopts = "-ra"
