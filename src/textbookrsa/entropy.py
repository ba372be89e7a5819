"""Random source handling for key generation.

Provides the generators the key generation draws from. By default these are backed by the operating system's entropy
pool; a byte seed may be supplied instead to get a reproducible generator for teaching and testing. Seeded generators
are not suitable for production key generation.

Typical usage example:

    rng = seeded_generator()
    rng = seeded_generator(time_seed())
    e = draw_bits(rng, 1024)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
import secrets
import time
import warnings

logger = logging.getLogger(__name__)


class EntropyError(RuntimeError):
    """The random source could not be seeded or failed to deliver usable values."""


def time_seed() -> bytes:
    """Derives a seed from the current time in nanoseconds.

    Returns:
        Eight big-endian bytes of `time.time_ns()`.
    """
    return time.time_ns().to_bytes(8, byteorder="big")


def seeded_generator(seed: bytes | None = None) -> random.Random:
    """Creates the generator for a single key generation.

    Args:
        seed: Optional seed bytes. If omitted the generator draws from the OS entropy pool and cannot be seeded.
            Warning! Seeded generators are reproducible and not cryptographically secure: they are a Mersenne
            Twister `random.Random`, not an OS-backed source.

    Returns:
        A fresh generator exposing the `random.Random` interface.

    Raises:
        EntropyError: If an empty seed is supplied.
    """
    if seed is None:
        return secrets.SystemRandom()
    if not seed:
        raise EntropyError("Cannot seed a generator with empty bytes.")
    warnings.warn("Seeded generators are reproducible and unsuitable for production keys.", RuntimeWarning)
    logger.debug("Seeding generator with %d bytes", len(seed))
    return random.Random(int.from_bytes(seed, byteorder="big"))


def draw_bits(rng: random.Random, k: int) -> int:
    """Draws a `k`-bit non-negative integer from `rng`.

    Args:
        rng: The generator to draw from.
        k: Number of random bits. Must be positive.

    Returns:
        An integer in range `[0, 2**k)`.

    Raises:
        EntropyError: If the underlying source fails.
    """
    try:
        return rng.getrandbits(k)
    except (OSError, NotImplementedError) as exc:
        raise EntropyError("Random source failed to deliver bits.") from exc
