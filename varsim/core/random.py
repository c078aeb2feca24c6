"""
Random stream handling.

Every component takes its randomness from an explicit numpy Generator.
Seeds are normalised here, and independent sub-streams for grid points are
derived with SeedSequence.spawn so a sweep gives the same numbers whether
it runs in one process or many.
"""

from typing import Union

import numpy as np

from varsim.core.exceptions import ValidationError

SeedLike = Union[int, np.random.SeedSequence, np.random.Generator, None]


def as_generator(seed: SeedLike) -> np.random.Generator:
    """
    Return a Generator for `seed`.

    A Generator is returned unchanged, so the caller's stream advances.
    Anything else seeds a fresh PCG64 stream.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None or isinstance(seed, (int, np.integer, np.random.SeedSequence)):
        if isinstance(seed, bool):
            raise ValidationError("seed: expected int, got bool")
        return np.random.default_rng(seed)
    raise ValidationError(
        f"seed: expected int, SeedSequence, Generator or None, "
        f"got {type(seed).__name__}"
    )


def spawn_generators(seed: SeedLike, k: int) -> list[np.random.Generator]:
    """
    Derive `k` independent Generators from `seed`.

    Child i depends only on the seed and i, never on how many children are
    consumed in parallel.
    """
    if isinstance(seed, np.random.Generator):
        return seed.spawn(k)
    if isinstance(seed, bool):
        raise ValidationError("seed: expected int, got bool")
    if seed is None or isinstance(seed, (int, np.integer)):
        seed = np.random.SeedSequence(seed)
    if not isinstance(seed, np.random.SeedSequence):
        raise ValidationError(
            f"seed: expected int, SeedSequence, Generator or None, "
            f"got {type(seed).__name__}"
        )
    # Children are built directly so the caller's SeedSequence is unchanged.
    return [
        np.random.default_rng(np.random.SeedSequence(
            seed.entropy,
            spawn_key=seed.spawn_key + (i,),
            pool_size=seed.pool_size,
        ))
        for i in range(k)
    ]


def seed_entropy(seed: SeedLike) -> int | None:
    """Entropy of the seed for reproducibility metadata, if known."""
    if isinstance(seed, (int, np.integer)) and not isinstance(seed, bool):
        return int(seed)
    if isinstance(seed, np.random.SeedSequence):
        return seed.entropy
    return None
