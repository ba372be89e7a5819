# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from textbookrsa import codec

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""


@pytest.mark.parametrize("message", [None, "", b""])
def test_encode_empty_is_zero(message):
    assert codec.encode(message) == 0


def test_decode_none_is_empty():
    assert codec.decode(None) == b""
    assert codec.decode(0) == b""
    assert codec.decode_text(None) == ""


def test_encode_big_endian():
    assert codec.encode(b"\x01\x00") == 256
    assert codec.encode("A") == 65
    assert codec.encode("hello") == int.from_bytes(b"hello", "big")


@pytest.mark.parametrize("payload", [b"A", b"Quick!", b"A" * 64, standard_payload.encode("utf-8"), b"\x01\x00\x00"])
def test_round_trip(payload):
    assert codec.decode(codec.encode(payload)) == payload


@pytest.mark.parametrize("payload", [b"\x80", b"\xff", b"\xff\x00\x01", "été".encode("utf-8")])
def test_round_trip_top_bit_set(payload):
    # Unsigned: no sign byte is prepended.
    assert codec.decode(codec.encode(payload)) == payload
    assert codec.encode(payload) > 0


def test_leading_zero_dropped():
    assert codec.encode(b"\x00abc") == codec.encode(b"abc")
    assert codec.decode(codec.encode(b"\x00abc")) == b"abc"
    assert codec.decode(codec.encode(b"\x00abc"), fixedlen=4) == b"\x00abc"


def test_decode_fixedlen_too_short():
    with pytest.raises(OverflowError):
        codec.decode(65536, fixedlen=2)


def test_decode_negative():
    with pytest.raises(ValueError):
        codec.decode(-1)


@pytest.mark.parametrize("encoding", ["utf-8", "utf-16", "ascii"])
def test_text_round_trip(encoding):
    text = "hello"
    assert codec.decode_text(codec.encode(text, encoding), encoding) == text


def test_integer_to_bytes_fixed():
    assert codec.integer_to_bytes(1, 4) == b"\x00\x00\x00\x01"
    assert codec.bytes_to_integer(b"\x00\x00\x00\x01") == 1
