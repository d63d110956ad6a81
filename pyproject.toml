[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stndchain"
version = "0.1.0"
description = "In-memory model of a collateralised stablecoin chain: asset registry, constant-product market, price oracle and debt vaults."
requires-python = ">=3.10"
dependencies = []
keywords = ["amm", "oracle", "cdp", "vault", "liquidity", "defi", "simulation"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stndchain"]

[tool.pytest.ini_options]
addopts = "-ra"
