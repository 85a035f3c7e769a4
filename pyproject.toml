[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fanouttopic"
version = "0.1.0"
description = "Thread-safe buffering publish-subscribe topic with dynamic fanout and per-receiver queue limits."
requires-python = ">=3.10"
dependencies = []
keywords = ["pubsub", "publish-subscribe", "fanout", "topic", "queue", "threading"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fanouttopic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
