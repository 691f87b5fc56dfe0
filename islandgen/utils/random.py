"""
Random number generation utilities.

All generation code draws from a NumPy Generator created here and passed in
explicitly by the caller. There is no module-level PRNG: the same seed always
reproduces the same island, no matter what else has run in the process.
"""

import hashlib
from typing import Union

import numpy as np

from ..errors import ConfigError

SEED_SIZE = 32


def seed_from_string(text: str) -> bytes:
    """
    Derive a 32-byte seed from arbitrary text.

    Args:
        text: Seed text, e.g. typed in by a user

    Returns:
        SHA-256 digest of the UTF-8 encoded text
    """
    return hashlib.sha256(text.encode("utf-8")).digest()


def make_rng(seed: Union[bytes, bytearray]) -> np.random.Generator:
    """
    Create a PCG64-backed generator from a fixed-size byte seed.

    Args:
        seed: Exactly 32 bytes

    Returns:
        Freshly seeded NumPy Generator
    """
    if len(seed) != SEED_SIZE:
        raise ConfigError(f"seed must be {SEED_SIZE} bytes, got {len(seed)}")
    return np.random.Generator(np.random.PCG64(int.from_bytes(bytes(seed), "little")))
