[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyneat"
version = "0.1.0"
description = "Neuroevolution of polynomial neural network topologies, with a small message-passing neuron model"
requires-python = ">=3.10"
dependencies = []
keywords = ["neat", "neuroevolution", "genetic-algorithm", "neural-network", "polynomial"]
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
    "Typing :: Typed",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["polyneat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
