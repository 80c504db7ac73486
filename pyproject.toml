[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lumenkit"
version = "0.1.0"
description = "Physically based shading building blocks: BxDFs, microfacet models, Fresnel terms, textures and participating media."
requires-python = ">=3.10"
dependencies = []
keywords = ["rendering", "path tracing", "bsdf", "microfacet", "fresnel", "participating media", "texture"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lumenkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
