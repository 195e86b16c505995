"""
Concurrent speech fragment generation.
"""

from .batch import PendingBatch, ScratchDirectory
from .fragments import FragmentGenerator

__all__ = [
    'PendingBatch',
    'ScratchDirectory',
    'FragmentGenerator'
]
