from __future__ import annotations
import logging

import numpy as np

from .. import config

logger = logging.getLogger(__name__)


class RandomSource:
    """
    Injectable supplier of uniform bytes in [0, 256).
    Seed it for deterministic output; share one instance per chain of work.
    """

    def __init__(self, seed: int | None = None, generator: np.random.Generator | None = None):
        self.seed = seed
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    def uniform_bytes(self, shape) -> np.ndarray:
        return self._rng.integers(0, 256, size=shape, dtype=np.uint8)


_default_source: RandomSource | None = None


def default_random_source() -> RandomSource:
    """Process-wide source seeded from RANDOM_SEED, created on first use."""
    global _default_source
    if _default_source is None:
        logger.debug(f"Creating default random source with seed {config.RANDOM_SEED}")
        _default_source = RandomSource(seed=config.RANDOM_SEED)
    return _default_source
