[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdfatlas"
version = "0.1.0"
description = "Layout, packing and bitmap helpers for signed distance field glyph atlases"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["sdf", "msdf", "atlas", "font", "glyph", "rectangle packing", "texture"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sdfatlas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
