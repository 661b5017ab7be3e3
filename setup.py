#!/usr/bin/env python3
"""Setup script for the slaveplay package."""

import re

from setuptools import find_packages, setup

# Get the version from __init__.py to avoid duplication
with open("slaveplay/__init__.py", encoding="utf-8") as f:
    version_match = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', f.read())
    if not version_match:
        raise RuntimeError("Version string not found in __init__.py")
    VERSION = version_match.group(1)

setup(
    name="slaveplay",
    version=VERSION,
    description="Control MPlayer through its slave-mode line protocol",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "slaveplay=slaveplay.cli.main:main",
        ],
    },
    install_requires=[
        "tomli>=2.0.0",
        "tomli-w>=1.0.0",
    ],
    package_data={
        "slaveplay": ["py.typed"],  # Indicate the package is typed
    },
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=6.0.0",
            "pytest-mypy>=0.10.0",
            "black",
            "isort",
            "mypy",
            "ruff",
            "types-setuptools",
        ],
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Sound/Audio :: Players",
    ],
)
