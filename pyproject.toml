[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boxengine"
version = "0.1.0"
description = "A small 2D platformer engine with swept AABB physics, sprite-sheet animation and batched rendering"
requires-python = ">=3.10"
keywords = ["game", "engine", "2d", "platformer", "physics", "aabb", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
boxengine = "boxengine.game:main"

[tool.hatch.build.targets.wheel]
packages = ["boxengine"]

[tool.pytest.ini_options]
addopts = "-ra"
