[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "whirsum"
version = "0.1.0"
description = "Sumcheck prover for multilinear polynomials over prime fields, with a Fiat-Shamir transcript"
requires-python = ">=3.10"
dependencies = []
keywords = ["sumcheck", "multilinear", "polynomial", "fiat-shamir", "proof-system", "prime-field"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["whirsum"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
