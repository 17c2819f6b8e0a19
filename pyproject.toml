[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tbldoc"
version = "1.65.3"
description = "Database schema model with relation repair, JSON/YAML serialisation and documentation template helpers"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["database", "schema", "documentation", "er-diagram", "json", "yaml"]
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
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Documentation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tbldoc"]

[tool.pytest.ini_options]
addopts = "-ra"
