[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dendron"
version = "0.1.0"
description = "Dendritic neuron models trained by gradient descent on logic gates and toy classification tasks"
requires-python = ">=3.10"
dependencies = []
keywords = ["neural network", "dendritic neuron", "machine learning", "logic gates", "xor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dendron-xor = "dendron.xor:main"
dendron-circle = "dendron.circle:main"
dendron-logic = "dendron.logic:main"

[tool.hatch.build.targets.wheel]
packages = ["dendron"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
