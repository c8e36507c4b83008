"""
Setup configuration for the wired configuration core.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = requirements_file.read_text().strip().split("\n") if requirements_file.exists() else []

# Read long description from README if it exists
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="wired",
    version="0.1.0",
    description="Hot-reloadable, validated configuration for the wired notification daemon",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["wired", "wired.*"]),
    package_data={"wired.config": ["wired.toml"]},
    install_requires=requirements,
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "wired-config=wired.daemon:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
        "journal": [
            "systemd-python>=235",
        ],
    },
)
