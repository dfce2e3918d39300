[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "avsdk"
version = "0.1.0"
description = "Pure-Python checksums, cryptographic hashes, HMACs and PE import-table parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["crc32", "md5", "sha1", "sha256", "sha512", "hmac", "pe", "portable-executable", "imports"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["avsdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
