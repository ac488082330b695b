[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "expensetracker"
version = "1.0.0"
description = "A small JSON HTTP service, backed by SQLite, for recording income and expenses and summarising them."
requires-python = ">=3.10"
keywords = ["expenses", "income", "budget", "rest", "json", "http", "flask", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "flask",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
expensetracker = "expensetracker.app:main"

[tool.hatch.build.targets.wheel]
packages = ["expensetracker"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
