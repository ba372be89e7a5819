# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random
import secrets

import pytest

from textbookrsa import entropy


def test_time_seed():
    seed = entropy.time_seed()
    assert isinstance(seed, bytes)
    assert len(seed) == 8


def test_unseeded_uses_system_entropy():
    assert isinstance(entropy.seeded_generator(), secrets.SystemRandom)


def test_seeded_is_reproducible():
    with pytest.warns(RuntimeWarning, match="Seeded generators are reproducible"):
        first = entropy.seeded_generator(b"\x00\xff")
    with pytest.warns(RuntimeWarning):
        second = entropy.seeded_generator(b"\x00\xff")
    assert [first.getrandbits(64) for _ in range(4)] == [second.getrandbits(64) for _ in range(4)]


def test_seeded_empty_fails():
    with pytest.raises(entropy.EntropyError):
        entropy.seeded_generator(b"")


@pytest.mark.parametrize("k", [1, 8, 64, 1024])
def test_draw_bits_range(k):
    assert 0 <= entropy.draw_bits(random.Random(1), k) < 2**k


@pytest.mark.parametrize("err", [OSError, NotImplementedError])
def test_draw_bits_source_failure(mocker, err):
    rng = mocker.Mock(spec=random.Random)
    rng.getrandbits.side_effect = err()
    with pytest.raises(entropy.EntropyError) as info:
        entropy.draw_bits(rng, 64)
    assert isinstance(info.value.__cause__, err)
    assert isinstance(info.value, RuntimeError)


def test_seeded_is_not_system_entropy():
    with pytest.warns(RuntimeWarning, match="unsuitable for production keys"):
        rng = entropy.seeded_generator(entropy.time_seed())
    assert isinstance(rng, random.Random)
    assert not isinstance(rng, secrets.SystemRandom)
