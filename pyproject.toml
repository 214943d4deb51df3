[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "climbkit"
version = "0.1.0"
description = "Scene, camera, lighting and rigid-body physics model for a first-person climbing game"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game", "physics", "camera", "aabb", "collision", "scene-graph", "lighting"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["climbkit"]

[tool.pytest.ini_options]
addopts = "-ra"
