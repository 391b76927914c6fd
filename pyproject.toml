[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agrinode"
version = "0.1.0"
description = "Agricultural sensor node logic: LoRa packet encoding, radio configuration and alert classification"
requires-python = ">=3.10"
dependencies = []
keywords = ["lora", "agriculture", "sensor", "telemetry", "alerts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["agrinode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
