[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modio"
version = "0.1.0"
description = "A small modular audio synthesis engine with oscillators, effects, mixers and a text-editing core"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "synthesis", "oscillator", "mixer", "dsp", "wav", "text-editing"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
modio-sandbox = "modio.sandbox:main"

[tool.hatch.build.targets.wheel]
packages = ["modio"]

[tool.pytest.ini_options]
addopts = "-ra"
