"""Configures pytest further."""
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from textbookrsa import keygen


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture(scope="session")
def known_primes() -> tuple[int, int]:
    """A pair of distinct 512-bit primes from an independent RSA implementation."""
    privs = rsa.generate_private_key(public_exponent=65537, key_size=1024).private_numbers()
    return privs.p, privs.q


@pytest.fixture
def textbook_material() -> keygen.KeyMaterial:
    """The classic p=61, q=53, e=17 worked example."""
    return keygen.KeyMaterial(3233, 17, 2753, 6)
