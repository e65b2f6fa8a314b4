"""
adb-projector - Android Screen Projector
Mirrors an Android device screen by pulling framebuffer snapshots from the ADB daemon.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from __init__.py
version_file = Path(__file__).parent / "adb_projector" / "__init__.py"
version_content = version_file.read_text()
version_line = [
    line for line in version_content.split("\n") if line.startswith("__version__")
]
if version_line:
    version = version_line[0].split("=")[1].strip().strip('"')
else:
    version = "0.1.0"

# Read README for long description
readme_file = Path(__file__).parent / "adb_projector" / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text()
else:
    long_description = "Android screen projector over the ADB framebuffer service"

setup(
    name="adb-projector",
    version=version,
    description="Mirror an Android device screen using the ADB framebuffer service",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*", "examples*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Graphics :: Capture :: Screen Capture",
        "Topic :: System :: Hardware",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "black>=24.0.0",
            "mypy>=1.8.0",
        ],
        "gui": [
            "PySide6>=6.6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "adb-projector=adb_projector.client.client:main",
        ],
    },
)
