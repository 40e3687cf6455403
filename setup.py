#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent

# Handle README.md that might not exist in Docker build
try:
    README = (HERE / "README.md").read_text()
except FileNotFoundError:
    README = "Positional section similarity for ELF and PE binaries"

setup(
    name="sectiondiff",
    version="1.0.0",
    description="Positional section similarity for ELF and PE binaries",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Marc Rivero",
    author_email="mriverolopez@gmail.com",
    packages=find_packages(include=["sectiondiff", "sectiondiff.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Information Technology",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
        "Topic :: Security",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pyfiglet>=0.8.post1",
        "pefile>=2023.2.7",
        "pyelftools>=0.29",
        "rich>=13.7.0",
        "click>=8.1.7",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sectiondiff=sectiondiff.cli_main:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
