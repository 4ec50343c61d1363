[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudedit"
version = "0.1.0"
description = "Selection, transform, undo and measurement logic for interactive point cloud editing"
requires-python = ">=3.10"
dependencies = []
keywords = ["point cloud", "selection", "trackball", "undo", "3d", "editor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cloudedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
