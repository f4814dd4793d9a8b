[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stealthreq"
version = "0.2.0"
description = "Human-like request mutation primitives for crawlers and scrapers."
requires-python = ">=3.11"
dependencies = []
keywords = ["crawler", "scraper", "http", "stealth", "waf", "headers", "tls", "ja3"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stealthreq"]

[tool.hatch.build.targets.sdist]
include = ["stealthreq", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
