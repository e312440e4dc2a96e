[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wolfmac"
version = "0.1.0"
description = "Core pieces of a classic ray-cast shooter engine: LZSS decoding, an 8-bit frame buffer, palettes, doors and enemy movement"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "lzss", "raycaster", "palette", "doors", "pathfinding"]
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
    "Topic :: Games/Entertainment :: First Person Shooters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wolfmac"]

[tool.pytest.ini_options]
addopts = "-ra"
