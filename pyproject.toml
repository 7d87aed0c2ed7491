[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clmmpool"
version = "0.1.0"
description = "Account state, binary layouts and address derivation for a concentrated-liquidity pool program"
requires-python = ">=3.10"
dependencies = []
keywords = ["amm", "clmm", "concentrated-liquidity", "liquidity-pool", "borsh", "pda"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["clmmpool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
