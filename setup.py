#!/usr/bin/env python3
"""
Setup configuration for songlink-cli
Share music links across streaming platforms via song.link, with Apple Music search and download
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "pyyaml>=6.0.1",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "rich>=13.7.0",
    "python-dotenv>=1.0.0",
    "mutagen>=1.47.0",
    "yt-dlp>=2023.12.30",
    "pyperclip>=1.8.2",
    "PyJWT[crypto]>=2.8.0",
]

setup(
    name="songlink-cli",
    version="1.0.0",
    author="songlink-cli contributors",
    description="Copy song.link and Spotify URLs for the streaming link on your clipboard",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "responses>=0.24.0",
            "cryptography>=41.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "songlink=songlink_cli.cli:main",
        ],
    },
    keywords="songlink spotify apple-music musickit clipboard yt-dlp cli",
)
