[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arkprims"
version = "0.1.0"
description = "Cryptographic primitives: BLAKE2s with parameter blocks, a BLAKE2s PRF, fixed-height Merkle trees with bit-path verification, and field-element input repacking"
requires-python = ">=3.10"
dependencies = []
keywords = ["blake2s", "prf", "merkle-tree", "cryptography", "snark", "field-elements"]
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
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["arkprims"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
