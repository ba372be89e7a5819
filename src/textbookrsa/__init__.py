"""Textbook RSA in an Academic Sense.

Provides unpadded RSA key generation, encryption, decryption and signing over plain integers, plus helpers to turn
text and bytes into those integers. Not for production use: there is no padding and no side-channel protection.

Typical usage example:

    pk = RSAPrivKey(1024)
    c = pk.encrypt(encode("Hi there!"))
    r = decode_text(pk.decrypt(c))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.codec import decode
from textbookrsa.codec import decode_text
from textbookrsa.codec import encode
from textbookrsa.entropy import EntropyError
from textbookrsa.keygen import generate_key_material
from textbookrsa.keygen import KeyMaterial
from textbookrsa.keygen import needs_retry
from textbookrsa.keygen import random_probable_prime
from textbookrsa.rsa import RSAPrivKey
from textbookrsa.rsa import RSAPubKey
from textbookrsa.transform import sign

__version__ = "0.1.0"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "KeyMaterial",
    "EntropyError",
    "generate_key_material",
    "random_probable_prime",
    "needs_retry",
    "encode",
    "decode",
    "decode_text",
    "sign",
]
