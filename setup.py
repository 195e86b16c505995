"""
Setup configuration for Sentence Audio Builder.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="sentence-audio-builder",
    version="0.1.0",
    author="Sentence Audio Builder Team",
    description="Spaced-repetition language-learning audio tracks from synthesized speech",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "google-cloud-translate>=3.0.0",
        "google-cloud-texttospeech>=2.0.0",
        "pydub>=0.25.1",
        "audioop-lts>=0.2.1; python_version>='3.13'",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "sentence-audio-builder=sentence_audio_builder.main:main",
        ],
    },
)
