#!/usr/bin/env python3
"""
Setup file for parquet-inspect
"""

from setuptools import setup, find_packages

setup(
    name="parquet-inspect",
    version="0.1.0",
    description="Schema, column statistics and dictionary sampling for Parquet files",
    author="",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "thrift",
        "pyarrow",
    ],
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "pandas",
        ],
    },
    entry_points={
        "console_scripts": [
            "parquet-inspect=parquet_inspect.cli:main",
        ],
    },
)
