"""
Sentence Audio Builder.

Assembles spaced-repetition language-learning audio tracks from
synthesized speech fragments and pre-built silence files.
"""

__version__ = "0.1.0"
