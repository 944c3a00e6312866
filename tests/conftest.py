"""
Blind escrow test fixtures
"""

import pytest
import rsa

from blindsig.blind_signatures import BlindSigner
from blindsig.keys import KeyPair, key_pair_from_rsa
from escrow.logic import EscrowLedger
from escrow.service import create_app
from escrow.vault import MemoryVault

UNIT = 1000


@pytest.fixture
def toy_key_pair() -> KeyPair:
    """N = 11 * 17, E * D = 161 = 1 mod 160."""
    return KeyPair(n=187, e=7, d=23)


@pytest.fixture
def toy_signer(toy_key_pair) -> BlindSigner:
    return BlindSigner(toy_key_pair)


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.PrivateKey:
    _, private_key = rsa.newkeys(512)
    return private_key


@pytest.fixture
def signer(rsa_private_key) -> BlindSigner:
    return BlindSigner(key_pair_from_rsa(rsa_private_key))


@pytest.fixture
def vault() -> MemoryVault:
    return MemoryVault(refused_recipients=["mallory"])


@pytest.fixture
def ledger(signer, vault) -> EscrowLedger:
    return EscrowLedger(signer, vault, UNIT)


@pytest.fixture
def client(ledger):
    web = create_app(ledger)
    web.config["TESTING"] = True
    return web.test_client()


def identifier_for(seed: int, length: int = 32) -> bytes:
    return bytes((seed + i) % 256 for i in range(length))


@pytest.fixture
def make_identifier():
    return identifier_for
