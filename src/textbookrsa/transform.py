"""Stateless textbook RSA operations.

Encryption, decryption, signing and verification are all the same modular exponentiation, differing only in which
exponent and modulus are supplied. Inputs are not range checked: values at or above the modulus wrap around.

Typical usage example:

    c = encrypt(m, e, n)
    m = decrypt(c, d, n)
    s = sign(b"payload", d_bytes, n_bytes)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import overload

from textbookrsa import codec


def c_rsa(message: int, expo: int, mod: int) -> int:
    """Performs core RSA operation. (Encrypt/Decrypt/Sign/Verify).

    Args:
        message: The int-marshalled message.
        expo: The exponent to raise to.
        mod: The modulus to reduce by.

    Returns:
        `message**expo mod mod`.
    """
    return pow(message, expo, mod)


def encrypt(message: int, pub_exp: int, mod: int) -> int:
    """Encrypts `message` with a public exponent."""
    return c_rsa(message, pub_exp, mod)


def decrypt(ciphertext: int, priv_exp: int, mod: int) -> int:
    """Decrypts `ciphertext` with a private exponent."""
    return c_rsa(ciphertext, priv_exp, mod)


@overload
def sign(message: int, exponent: int, modulus: int) -> int:
    ...


@overload
def sign(message: bytes, exponent: bytes, modulus: bytes) -> bytes:
    ...


def sign(message: int | bytes, exponent: int | bytes, modulus: int | bytes) -> int | bytes:
    """Signs `message` with any exponent and modulus, including another party's.

    Verifying a signature is signing it again with the public pair.

    Args:
        message: The message, as an integer or big-endian bytes.
        exponent: The exponent, of the same type as `message`.
        modulus: The modulus, of the same type as `message`.

    Returns:
        The signature, of the same type as `message`.

    Raises:
        TypeError: If the arguments mix integers and bytes.
    """
    if isinstance(message, int) and isinstance(exponent, int) and isinstance(modulus, int):
        return c_rsa(message, exponent, modulus)
    if isinstance(message, bytes) and isinstance(exponent, bytes) and isinstance(modulus, bytes):
        return codec.decode(c_rsa(codec.encode(message), codec.encode(exponent), codec.encode(modulus)))
    raise TypeError("Message, exponent and modulus must all be int or all be bytes")


def verify(message: int, signature: int, pub_exp: int, mod: int) -> bool:
    """Checks that `signature` opens to `message` under the public pair."""
    return c_rsa(signature, pub_exp, mod) == message
