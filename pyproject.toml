[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mwindow"
version = "0.1.0"
description = "Maintenance windows whose state follows the clock, and admission checks that block deployments while one is active"
requires-python = ">=3.10"
dependencies = []
keywords = ["maintenance", "deployment", "admission", "reconciler", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mwindow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
