[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecgpulse"
version = "0.1.0"
description = "Heart-rate detection from raw ECG/pulse samples: baseline removal, Butterworth band-pass filtering, adaptive thresholds and BPM counting"
requires-python = ">=3.10"
dependencies = []
keywords = ["ecg", "pulse", "heart rate", "bpm", "biquad", "butterworth", "signal processing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ecgpulse = "ecgpulse.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ecgpulse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
