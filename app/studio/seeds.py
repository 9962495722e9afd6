"""
Seed generation for image batches.
"""

import logging
import secrets
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

SEED_MODULUS = 2**32


def _strong_seed() -> int:
    return secrets.randbits(32)


def _clock_seed() -> int:
    return int(time.time() * 1000) % SEED_MODULUS


class SeedGenerator:
    """Draws batches of distinct 32-bit seeds.

    A batch is a single random draw offset by the image index, so seeds within
    one batch can never collide.
    """

    def __init__(self, source: Optional[Callable[[], int]] = None):
        self._source = source or _strong_seed

    def _draw(self) -> int:
        try:
            return self._source()
        except NotImplementedError:
            # No OS randomness available
            logger.warning("Strong random source unavailable, using clock-based seed")
            return _clock_seed()

    def next_batch(self, count: int) -> list[int]:
        if count < 1:
            raise ValueError(f"Batch count must be at least 1, got {count}")
        base = self._draw()
        return [(base + i) % SEED_MODULUS for i in range(count)]


_default_generator = SeedGenerator()


def next_batch(count: int) -> list[int]:
    """Draw `count` distinct seeds from the default generator."""
    return _default_generator.next_batch(count)
