[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chaiscene"
version = "0.1.0"
description = "Scene graph, components, camera control, window and viewport management, and OBJ/MTL model loading for a small game engine"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["scene", "game-engine", "camera", "transform", "obj", "mtl", "viewport"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chaiscene"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
