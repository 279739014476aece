[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nvimlink"
version = "0.1.0"
description = "Msgpack-RPC client, UI event decoding and API bindings for Neovim"
requires-python = ">=3.10"
dependencies = [
    "msgpack",
]
keywords = ["neovim", "nvim", "msgpack", "rpc", "editor", "ui"]
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
    "Framework :: AsyncIO",
    "Topic :: Text Editors",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
nvimlink-apigen = "nvimlink.apigen:main"

[tool.hatch.build.targets.wheel]
packages = ["nvimlink"]

[tool.hatch.build.targets.sdist]
include = ["nvimlink", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
