[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raycub"
version = "0.1.0"
description = "A grid ray-casting maze explorer driven by .cub scene files"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "maze", "cub", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
raycub = "raycub.app:main"

[tool.hatch.build.targets.wheel]
packages = ["raycub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
