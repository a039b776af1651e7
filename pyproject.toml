[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bugtracer"
version = "0.1.0"
description = "An interactive command-line bug tracker with per-user accounts stored in SQLite"
requires-python = ">=3.10"
keywords = ["bug tracker", "cli", "issues", "terminal", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Bug Tracking",
]
dependencies = [
    "bcrypt",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bugtracer = "bugtracer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["bugtracer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
