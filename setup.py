"""
Setup script for densekit

Pure-Python package in a src/ layout. Element storage uses ctypes from the
standard library; numpy is used for array interop.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/densekit/__init__.py
def get_version():
    version_file = Path("src/densekit/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="densekit",
    version=get_version(),
    description="Row-major dense matrices over fixed-width element kinds, with TF-IDF weighting",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    zip_safe=False,
)
