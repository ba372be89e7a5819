"""Provides the textbook RSA key objects: encryption, decryption, signing and verification.

A private key generates its own key material at construction and keeps it for its lifetime. Only the modulus and the
public exponent can be read back; the private exponent stays inside the object.

Typical usage example:

    pk = RSAPrivKey(1024)
    c = pk.pub.encrypt(encode("Hi there!"))
    r = decode_text(pk.decrypt(c))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa import codec
from textbookrsa import entropy
from textbookrsa import keygen
from textbookrsa import transform


class RSAPubKey:
    """An RSA public key: a modulus and a public exponent.

    Attributes:
        mod: The modulus of the keypair.
        expo: The public exponent.
    """
    __slots__ = ("_mod", "_expo")

    def __init__(self, mod: int, expo: int) -> None:
        self._mod = mod
        self._expo = expo

    @property
    def mod(self) -> int:
        return self._mod

    @property
    def expo(self) -> int:
        return self._expo

    @property
    def bsize(self) -> int:
        """Length of the modulus in bytes."""
        return (self._mod.bit_length() + 7) // 8

    def encrypt(self, message: int) -> int:
        """Encrypts the int-marshalled message. Values at or above the modulus wrap around."""
        return transform.encrypt(message, self._expo, self._mod)

    def verify(self, message: int, signature: int) -> bool:
        """Verifies that `signature` was made over `message` by the matching private key."""
        return transform.verify(message, signature, self._expo, self._mod)

    def needs_retry(self, message: int) -> bool:
        """Whether `message` is unusable: not below the modulus or not coprime to it."""
        return keygen.needs_retry(message, self._mod)

    def exponent_bytes(self) -> bytes:
        return codec.decode(self._expo)

    def modulus_bytes(self) -> bytes:
        return codec.decode(self._mod)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mod={self._mod}, expo={self._expo})"

    def __str__(self) -> str:
        return f"\nN = {self._mod}\n\ne = {self._expo}\n"


class RSAPrivKey:
    """RSA Private Key class implementation.

    Key material is generated once, when the object is created; create a new instance for new keys. The private
    exponent has no accessor, and neither do the primes or the totient, which are discarded during generation.

    Attributes:
        pub: The public key of the keypair.
        size: The bit length of each prime.
    """
    __slots__ = ("_key",)

    def __init__(self, size: int, certainty: int = keygen.DEFAULT_CERTAINTY, seed: bytes | None = None) -> None:
        """Generates the RSA key pair.

        Args:
            size: The bit length of each of the two primes.
            certainty: Primality certainty for prime generation.
            seed: Optional seed for the random source. Warning! Seeded keys are reproducible.

        Raises:
            ValueError: If `size` is too small.
            EntropyError: If the random source fails.
            ArithmeticError: If no private exponent can be derived.
        """
        rng = entropy.seeded_generator(seed)
        self._key = keygen.generate_key_material(size, certainty, rng)

    def __setattr__(self, name: str, value) -> None:
        # Key material is bound once, in __init__.
        if hasattr(self, "_key"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def pub(self) -> RSAPubKey:
        return RSAPubKey(self._key.mod, self._key.pub_exp)

    @property
    def size(self) -> int:
        return self._key.size

    def public_exponent_bytes(self) -> bytes:
        return self.pub.exponent_bytes()

    def modulus_bytes(self) -> bytes:
        return self.pub.modulus_bytes()

    def encrypt(self, message: int) -> int:
        """Encrypts with this key pair's public exponent."""
        return self.pub.encrypt(message)

    def decrypt(self, ciphertext: int) -> int:
        """Decrypts with the private exponent.

        Only ciphertexts made with this key pair's public key decrypt to anything meaningful.
        """
        return transform.decrypt(ciphertext, self._key.priv_exp, self._key.mod)

    def sign(self,
             message: int | bytes,
             exponent: int | bytes | None = None,
             modulus: int | bytes | None = None) -> int | bytes:
        """Signs the message.

        Without an exponent and modulus the private key signs. With both, the supplied pair is used instead, which
        lets the caller sign with another party's key or verify against a public pair.

        Args:
            message: The message, as an integer or big-endian bytes.
            exponent: Optional exponent, of the same type as `message`.
            modulus: Optional modulus, of the same type as `message`.

        Returns:
            The signature, of the same type as `message`.

        Raises:
            ValueError: If only one of `exponent` and `modulus` is given.
        """
        if exponent is None and modulus is None:
            signature = transform.c_rsa(codec.encode(message) if isinstance(message, bytes) else message,
                                        self._key.priv_exp, self._key.mod)
            return codec.decode(signature) if isinstance(message, bytes) else signature
        if exponent is None or modulus is None:
            raise ValueError("Exponent and modulus must be supplied together.")
        return transform.sign(message, exponent, modulus)

    def needs_retry(self, message: int) -> bool:
        """Whether `message` is unusable against this key's modulus."""
        return self.pub.needs_retry(message)

    encode = staticmethod(codec.encode)
    decode = staticmethod(codec.decode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._key.size}, mod={self._key.mod}, pub_exp={self._key.pub_exp})"

    def __str__(self) -> str:
        # Publish e and N, never d.
        return str(self.pub)
