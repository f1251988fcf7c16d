# sampling.py
# Standard-normal draws for the Monte Carlo engine.
# Every worker owns its own NormalSampler; streams for parallel workers are
# spawned from one SeedSequence so they are statistically independent.

from __future__ import annotations
import numpy as np
from typing import Optional, Union


__all__ = [
    "NormalSampler",
    "spawn_samplers",
]

SeedLike = Union[int, np.random.SeedSequence, None]


class NormalSampler:
    """Owned source of i.i.d. N(0, 1) draws.

    Parameters
    ----------
    seed : int, SeedSequence or None
        ``None`` pulls fresh entropy from the OS; an int or a spawned
        ``SeedSequence`` makes the stream reproducible.
    """

    def __init__(self, seed: SeedLike = None):
        if not isinstance(seed, np.random.SeedSequence):
            seed = np.random.SeedSequence(seed)
        self.seed_sequence = seed
        self._rng = np.random.default_rng(seed)

    def sample(self) -> float:
        """One standard-normal draw."""
        return float(self._rng.standard_normal())

    def standard_normal(self, size) -> np.ndarray:
        """Array of standard-normal draws with the given shape."""
        return self._rng.standard_normal(size)

    def spawn(self, n: int) -> list[NormalSampler]:
        """Independent child samplers, e.g. one per worker."""
        return [NormalSampler(ss) for ss in self.seed_sequence.spawn(n)]

    def __repr__(self):
        return f"NormalSampler(entropy={self.seed_sequence.entropy!r})"


def spawn_samplers(n: int, seed: SeedLike = None) -> list[NormalSampler]:
    """Build ``n`` samplers with independent streams from one root seed."""
    if n <= 0:
        raise ValueError("n must be positive.")
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return [NormalSampler(ss) for ss in seed.spawn(n)]
