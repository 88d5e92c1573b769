"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/getgauge/gauge"
KEYWORDS = "gauge release build packaging cross-compile installer nsis packagesbuild go"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        name="gaugebuild",
        version="0.1.0",
        description="Build, package and release tooling for the gauge CLI",
        url=URL,
        keywords=KEYWORDS,
        license="GPL-3.0-or-later",
        python_requires=">=3.11",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=["psutil>=5.9"],
        extras_require={"test": ["pytest>=7.0"]},
        entry_points={"console_scripts": ["gaugebuild=gaugebuild.cli:main"]},
    )
