#!/usr/bin/env python3
"""
Setup script for handsign, rule-based hand gesture recognition
"""

from pathlib import Path

from setuptools import setup, find_packages

HERE = Path(__file__).parent


def read_requirements():
    """Read runtime requirements, skipping comments and blank lines"""
    with open(HERE / "requirements.txt", "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="handsign",
    version="0.1.0",
    description="Classify MediaPipe hand landmarks into named gestures",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "handsign=handsign.main:run",
        ],
    },
)
