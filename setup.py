#!/usr/bin/env python3
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="storage-sharedkey",
    version="0.1.0",
    description="Shared Key request signing and CLI for storage account REST APIs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sharedkey", "sharedkey.*"]),
    py_modules=["skcli"],
    include_package_data=True,
    install_requires=[
        "click>=8.1.3",
        "requests>=2.31.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "freezegun>=1.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "skcli=skcli:cli",
        ],
    },
    python_requires=">=3.10",
)
