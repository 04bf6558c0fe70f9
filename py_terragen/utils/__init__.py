"""
Shared helpers: seeded randomness, numeric ranges and logging setup.
"""

from .ranges import Range
from .random import random_from, random_weighted, stage_rng

__all__ = ['Range', 'random_from', 'random_weighted', 'stage_rng']
