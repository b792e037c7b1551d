[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdlinalg"
version = "0.1.0"
description = "Builder-style matrix multiplication, QR and SVD with interchangeable backends over NumPy arrays"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["linear algebra", "matrix", "gemm", "qr", "svd", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mdlinalg"]

[tool.pytest.ini_options]
addopts = "-ra"
