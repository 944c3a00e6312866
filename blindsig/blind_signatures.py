import hashlib
import logging

from Crypto.Random import random

from blindsig.arithmetic import (
    gcd,
    mod_pow,
    modulo_multiplicative_inverse,
)
from blindsig.custom_exceptions import BadIdentifier, InvalidBlindFactor
from blindsig.keys import KeyPair, PublicKey

logger = logging.getLogger(__name__)

IDENTIFIER_LENGTH = 32


def hash_identifier(identifier: bytes, n: int, length: int = IDENTIFIER_LENGTH) -> int:
    """ SHA-256 of the identifier as a big-endian integer, reduced mod n. """
    if not isinstance(identifier, (bytes, bytearray)):
        raise BadIdentifier("Identifier must be bytes, found %s" % identifier.__class__.__name__)
    if length is not None and len(identifier) != length:
        raise BadIdentifier("Identifier must be %d bytes, found %d" % (length, len(identifier)))
    digest = hashlib.sha256(bytes(identifier)).digest()
    return int.from_bytes(digest, "big") % n


def check_blind_factor(r: int, n: int):
    if not 1 < r < n:
        raise InvalidBlindFactor("Blind factor must lie in (1, N)")
    if gcd(r, n) != 1:
        raise InvalidBlindFactor("Blind factor shares a factor with N")
    return True


def random_blind_factor(n: int) -> int:
    """ Draw r from a CSPRNG until 1 < r < n and gcd(r, n) == 1. """
    if n <= 3:
        raise InvalidBlindFactor("Modulus %d admits no blind factor" % n)
    while True:
        r = random.randrange(2, n)
        if gcd(r, n) == 1:
            return r


def blind(digest: int, r: int, key: PublicKey) -> int:
    n, e = key
    check_blind_factor(r, n)
    return (mod_pow(r, e, n) * (digest % n)) % n


def unblind(blind_signature: int, r: int, key: PublicKey) -> int:
    n = key.n
    r_inv = modulo_multiplicative_inverse(r, n)
    return (blind_signature * r_inv) % n


def verify(digest: int, signature: int, key: PublicKey) -> bool:
    n, e = key
    return mod_pow(signature, e, n) == digest % n


class BlindSigner:
    """
    RSA blind-signature engine around a fixed key pair.

    Only the holder of the private exponent can call sign(); every other
    operation is also available as a module-level function taking the
    public key, so a depositor can blind and unblind locally.
    """

    def __init__(self, key_pair: KeyPair, identifier_length: int = IDENTIFIER_LENGTH):
        self._key_pair = key_pair
        self._public_key = key_pair.public_key()
        self.identifier_length = identifier_length

    @property
    def modulus(self) -> int:
        return self._key_pair.n

    def public_key(self) -> PublicKey:
        return self._public_key

    def hash(self, identifier: bytes) -> int:
        return hash_identifier(identifier, self._key_pair.n, self.identifier_length)

    def blind(self, digest: int, r: int) -> int:
        return blind(digest, r, self._public_key)

    def sign(self, blinded_digest: int) -> int:
        return mod_pow(blinded_digest, self._key_pair.d, self._key_pair.n)

    def unblind(self, blind_signature: int, r: int) -> int:
        return unblind(blind_signature, r, self._public_key)

    def verify(self, digest: int, signature: int) -> bool:
        return verify(digest, signature, self._public_key)
