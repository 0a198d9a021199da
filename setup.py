#!/usr/bin/env python
import os
import re

from setuptools import find_packages, setup


def get_version():
    path = os.path.join(os.path.dirname(__file__), "src", "psd_layers", "version.py")
    with open(path) as f:
        return re.search(r'__version__ = "([^"]+)"', f.read()).group(1)


setup(
    name="psd-layers",
    version=get_version(),
    description="Decoder for layered 8-bit RGB Adobe Photoshop PSD files",
    license="MIT",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.1.0",
        "numpy",
        "Pillow>=10.3.0",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": ["psd-layers=psd_layers.__main__:main"],
    },
)
