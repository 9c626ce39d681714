[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fdfview"
version = "0.1.0"
description = "Interactive wireframe viewer for .fdf height maps"
requires-python = ">=3.10"
keywords = ["fdf", "wireframe", "heightmap", "viewer", "pygame", "orthographic"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fdfview = "fdfview.app:main"

[tool.hatch.build.targets.wheel]
packages = ["fdfview"]

[tool.pytest.ini_options]
addopts = "-ra"
