import sys
from pathlib import Path

from setuptools import setup

if sys.version_info[0:2] < (3, 8):
    raise RuntimeError("This package requires Python 3.8+.")

setup(
    name="veggies",
    version="0.1.0",
    packages=[
        "veggies",
        "veggies.schema",
    ],
    url="https://github.com/SunDwarf/veggies",
    license="MIT",
    author="Laura Dickinson",
    author_email="l@veriny.tf",
    description="Short, convention-driven declarators for table schemas",
    long_description=Path(__file__).with_name("README.rst").read_text(encoding="utf-8"),
    install_requires=[
        "cached_property>=1.3.0",
        "inflection>=0.5.0"
    ],
    extras_require={
        "docs": [
            "sphinx>=1.5.0",
            "guzzle_sphinx_theme"
        ],
        "test": [
            "pytest",
            "pytest-cov"
        ]
    },
    python_requires=">=3.8",
)
