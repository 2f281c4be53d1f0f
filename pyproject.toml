[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "admincore"
version = "0.1.0"
description = "Building blocks for admin back ends: caches, queues, locks, runnable services, search conditions and logging helpers"
requires-python = ">=3.10"
keywords = ["admin", "cache", "queue", "redis", "lock", "server", "search", "logging"]
classifiers = [
    "Development Status :: 4 - Beta",
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
dependencies = [
    "redis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["admincore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
