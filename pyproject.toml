[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "abtanalytics"
version = "1.0.0"
description = "Streaming sales-transaction aggregation with a small JSON analytics API"
requires-python = ">=3.10"
dependencies = []
keywords = ["analytics", "sales", "revenue", "csv", "aggregation", "json-api", "wsgi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
abtanalytics = "abtanalytics.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["abtanalytics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
