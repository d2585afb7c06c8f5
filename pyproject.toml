[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rootedparser"
version = "0.1.0"
description = "Turn IRS Form 990 e-file XML returns listed in an index CSV into consolidated JSON filing records."
requires-python = ">=3.10"
keywords = ["irs", "990", "990-ez", "990-pf", "nonprofit", "e-file", "xml", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Text Processing :: Markup :: XML",
]
dependencies = [
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rootedparser = "rootedparser.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rootedparser"]

[tool.pytest.ini_options]
addopts = "-ra"
