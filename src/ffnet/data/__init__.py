"""
Pattern Data
============

Labeled examples consumed by network scoring and by external training code.
"""

from .patterns import (
    Pattern,
    PatternSource,
    ListPatternSource,
)

__all__ = [
    'Pattern',
    'PatternSource',
    'ListPatternSource',
]
