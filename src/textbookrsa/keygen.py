"""Core Key Generation Utility, covering random probable primes and the textbook RSA key protocol.

Generates two distinct probable primes, derives the modulus and totient, searches for a random public exponent
coprime to the totient and inverts it into the private exponent. The primes and totient never leave the scope of
`generate_key_material`.

Typical usage example:

    p = random_probable_prime(512)
    km = generate_key_material(1024)
    needs_retry(km.pub_exp, km.mod)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import logging
import math
import random

from textbookrsa import entropy
from textbookrsa.entropy import EntropyError

logger = logging.getLogger(__name__)

DEFAULT_CERTAINTY: int = 10
MINIMUM_PRIME_SIZE: int = 8

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


@dataclasses.dataclass(frozen=True)
class KeyMaterial:
    """The generated key numbers. Owned by exactly one key object.

    Attributes:
        mod: The modulus N = p * q.
        pub_exp: The public exponent e.
        priv_exp: The private exponent d. Never shown in the repr.
        size: The requested bit length of each prime.
    """
    mod: int
    pub_exp: int
    priv_exp: int = dataclasses.field(repr=False)
    size: int


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    Uses the module-level `_SMALL_PRIMES` as a cache. Regeneration occurs if requested range is greater, forced by
    `change` or cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order. All primes at least to `n` or more unless `change` is True.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check. Must be a non-negative integer.
         n: The number up to which small primes are used. Passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int, rng: random.Random | None = None) -> bool:
    """Perform Miller-Rabin primality test.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin iterations to perform.
        rng: Generator for the witnesses. Defaults to the OS entropy pool.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    if rng is None:
        rng = entropy.seeded_generator()
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = rng.randrange(2, w - 1)
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def _fips_rounds(bits: int) -> int:
    """Miller-Rabin round count for a `bits`-long candidate, per FIPS 186-5 Appendix C.1."""
    if bits <= 512:
        return 40
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def check_prime(candidate: int,
                certainty: int | None = None,
                n: int = 10000,
                rng: random.Random | None = None) -> bool:
    """Performs a composite Primality test, using a limited amount of trial divisions, before a Miller-Rabin test.

    Args:
        candidate: The candidate prime to test.
        certainty: Target error bound exponent; a composite passes with probability at most `2**-certainty`.
            If not provided, uses the FIPS 186-5 round counts for the candidate's size.
        n: The number up to which to trial divide. Passed to `_trial_division()`.
        rng: Generator for the Miller-Rabin witnesses.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    if certainty is None:
        iters = _fips_rounds(candidate.bit_length())
    else:
        # Each round lets a composite through with probability <= 1/4.
        iters = max(1, math.ceil(certainty / 2))
    return _miller_rabin(candidate, iters, rng)


def random_probable_prime(size: int, certainty: int = DEFAULT_CERTAINTY, rng: random.Random | None = None) -> int:
    """Draws a random probable prime of exactly `size` bits.

    The two top bits are forced on, so the product of two such primes has exactly `2 * size` bits.

    Args:
        size: Bit length of the prime. Must be >= 2.
        certainty: Passed to `check_prime()`.
        rng: The generator to draw candidates from. Defaults to the OS entropy pool.

    Returns:
        A probable prime.

    Raises:
        ValueError: If `size` is below 2.
        EntropyError: If generation loops way beyond a reasonable time and a bit.
    """
    if size < 2:
        raise ValueError("Size must be at least 2.")
    if rng is None:
        rng = entropy.seeded_generator()
    msk = (1 << size - 1) | (1 << size - 2) | 1
    rep_cap = size * 5
    for attempt in range(1, rep_cap + 1):
        candidate = entropy.draw_bits(rng, size) | msk
        if check_prime(candidate, certainty, rng=rng):
            logger.debug("Found %d-bit probable prime after %d candidates", size, attempt)
            return candidate
    raise EntropyError(
        f"Run an improbable {rep_cap} amount of loops with no prime found. Check system random number generator.")


def needs_retry(candidate: int, modulus: int) -> bool:
    """Reports whether `candidate` is unusable against `modulus`.

    Args:
        candidate: The exponent or message to check.
        modulus: The totient or RSA modulus to check against.

    Returns:
        True if `candidate >= modulus` or the two are not coprime, False otherwise.
    """
    # Size first: oversized candidates skip the gcd.
    return candidate >= modulus or math.gcd(candidate, modulus) != 1


def _draw_public_exponent(size: int, totient: int, rng: random.Random) -> int:
    rep_cap = size * 100
    for attempt in range(1, rep_cap + 1):
        e = entropy.draw_bits(rng, 2 * size)
        if not needs_retry(e, totient):
            logger.debug("Public exponent accepted after %d candidates", attempt)
            return e
    raise EntropyError(f"No usable public exponent in {rep_cap} draws. Check system random number generator.")


def generate_key_material(size: int,
                          certainty: int = DEFAULT_CERTAINTY,
                          rng: random.Random | None = None) -> KeyMaterial:
    """Generates a textbook RSA key.

    Draws two distinct `size`-bit primes, a random public exponent `e` below and coprime to the totient, and its
    inverse `d`. The primes and the totient are dropped before returning.

    Args:
        size: The bit length of each prime. Must be at least `MINIMUM_PRIME_SIZE`.
        certainty: Primality certainty passed to `random_probable_prime()`.
        rng: The generator to draw from. Owned by this call. Defaults to the OS entropy pool.

    Returns:
        The generated key material.

    Raises:
        ValueError: If `size` is too small.
        EntropyError: If the random source fails or keeps producing unusable values.
        ArithmeticError: If the public exponent has no inverse modulo the totient.
    """
    if size < MINIMUM_PRIME_SIZE:
        raise ValueError(f"Size must be at least {MINIMUM_PRIME_SIZE}.")
    if rng is None:
        rng = entropy.seeded_generator()
    p = random_probable_prime(size, certainty, rng)
    q = random_probable_prime(size, certainty, rng)
    redraws = 0
    while q == p:  # (Un)Likely story.
        redraws += 1
        if redraws > size * 5:
            raise EntropyError("Kept drawing the same prime. Check system random number generator.")
        logger.debug("Second prime equals the first, redrawing")
        q = random_probable_prime(size, certainty, rng)
    n = p * q
    totient = (p - 1) * (q - 1)
    e = _draw_public_exponent(size, totient, rng)
    try:
        d = pow(e, -1, totient)
    except ValueError as exc:
        raise ArithmeticError("Public exponent is not invertible modulo the totient.") from exc
    del p, q, totient
    logger.info("Generated key with %d-bit modulus", n.bit_length())
    return KeyMaterial(n, e, d, size)
