#!/usr/bin/env python3
"""Setup script for mm3u."""

from setuptools import setup, find_packages

def read_requirements(filename):
    """Read requirements from file."""
    with open(filename, 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

def read_readme():
    """Read README file."""
    with open('README.md', 'r', encoding='utf-8') as f:
        return f.read()

setup(
    name="mm3u",
    version="0.1.0",
    description="Build an M3U playlist by fuzzy-matching song titles against local files",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["mm3u", "mm3u.*"]),
    install_requires=read_requirements('requirements.txt'),
    extras_require={
        'dev': read_requirements('requirements-dev.txt'),
    },
    entry_points={
        'console_scripts': [
            'mm3u=mm3u.cli:app',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Utilities",
    ],
    python_requires=">=3.11",
    keywords="music, playlist, m3u, fuzzy, levenshtein",
)
