[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tensorlab"
version = "0.1.0"
description = "Comparisons, masking, indexing, sorting, sampling, BLAS-style products and LAPACK solvers over NumPy arrays"
requires-python = ">=3.10"
keywords = [
    "tensor",
    "linear algebra",
    "lapack",
    "blas",
    "sorting",
    "sampling",
    "numerics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tensorlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
