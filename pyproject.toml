[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "grayimage"
version = "0.1.0"
description = "Read, write and transform 8-bit and 4-bit gray-scale TIFF and 8-bit BMP images"
requires-python = ">=3.10"
dependencies = []
keywords = ["tiff", "bmp", "image", "grayscale", "histogram", "image-processing"]
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
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
grayimage = "grayimage.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["grayimage"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
