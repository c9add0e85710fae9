[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hifi"
version = "0.1.0"
description = "Building blocks for finding internal APIs and routes in web app bytes"
requires-python = ">=3.11"
dependencies = []
keywords = [
    "web",
    "api-discovery",
    "nextjs",
    "sveltekit",
    "nuxt",
    "grep",
    "json",
    "scanner",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hifi"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
