"""
Random number generation utilities.

Every generator stage gets its own ``numpy.random.Generator``, seeded from the
world seed and the stage's position in the pipeline. There is no module-level
random state: the same seed always produces the same world, regardless of
what else ran in the process.
"""

from typing import Collection, Mapping, Sequence, TypeVar

import numpy as np

T = TypeVar("T")

_SEED_MASK = 0xFFFFFFFFFFFFFFFF


def stage_rng(seed: int, stage: int) -> np.random.Generator:
    """
    Create the random source for one pipeline stage.

    Args:
        seed: World seed (any 64-bit value, signed or unsigned)
        stage: Index of the stage in the pipeline

    Returns:
        A freshly seeded numpy Generator
    """
    return np.random.default_rng([seed & _SEED_MASK, stage])


def random_from(rng: np.random.Generator, items: Collection[T]) -> T:
    """
    Choose a uniformly random element from a non-empty collection.

    Non-sequence collections are iterated in their own order, so the result is
    deterministic as long as that order is.
    """
    seq = items if isinstance(items, Sequence) else list(items)
    if not seq:
        raise IndexError("Cannot choose from an empty collection")
    return seq[int(rng.integers(len(seq)))]


def random_weighted(rng: np.random.Generator, weights: Mapping[T, float]) -> T:
    """Choose a key from the mapping with probability proportional to its weight."""
    keys = list(weights.keys())
    if not keys:
        raise IndexError("Cannot choose from an empty weight table")
    values = np.array([weights[k] for k in keys], dtype=np.float64)
    if np.any(values < 0) or values.sum() <= 0:
        raise ValueError(f"Weights must be non-negative with a positive total, got {weights}")
    return keys[int(rng.choice(len(keys), p=values / values.sum()))]
