"""Conversion between messages and the integers RSA operates on.

Messages are read as big-endian unsigned integers of minimal length. Leading zero bytes therefore do not survive a
round trip unless the caller asks for a fixed length on the way back.

Typical usage example:

    m = encode("hello")
    decode_text(m)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a string, using a fixed-length byte representation.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def encode(message: str | bytes | None, encoding: str = "utf-8") -> int:
    """Turns a message into its integer representative.

    An empty or missing message is the integer zero, not an error.

    Args:
        message: Text or bytes to convert.
        encoding: Encoding applied to text messages.

    Returns:
        The representative integer.
    """
    if not message:
        return 0
    if isinstance(message, str):
        message = message.encode(encoding)
    return bytes_to_integer(message)


def decode(message: int | None, fixedlen: int | None = None) -> bytes:
    """Turns an integer representative back into bytes.

    Args:
        message: The integer to convert. A missing integer yields empty bytes.
        fixedlen: Optional output length, left-padding with zero bytes. Defaults to the minimal length.

    Returns:
        The representative bytes.

    Raises:
        ValueError: If `message` is negative.
    """
    if message is None:
        return b""
    if message < 0:
        raise ValueError("Message representative must be non-negative")
    if fixedlen is None:
        fixedlen = (message.bit_length() + 7) // 8
    return integer_to_bytes(message, fixedlen)


def decode_text(message: int | None, encoding: str = "utf-8") -> str:
    """Turns an integer representative back into text."""
    return decode(message).decode(encoding)
