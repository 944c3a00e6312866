from dataclasses import dataclass
from typing import NamedTuple

import rsa

from blindsig.arithmetic import mod_pow
from blindsig.custom_exceptions import InvalidKeyPair

CHECK_BASES = (2, 3, 5, 7, 11, 13)


class PublicKey(NamedTuple):
    n: int
    e: int


@dataclass(frozen=True)
class KeyPair:
    """ Fixed RSA parameters: public modulus n, public exponent e, private exponent d. """
    n: int
    e: int
    d: int

    def __post_init__(self):
        for name in ("n", "e", "d"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise InvalidKeyPair("%s must be a positive integer" % name)
        # D*E == 1 mod phi(N) implies the round trips below; phi itself stays private
        for m in CHECK_BASES:
            if m >= self.n:
                break
            if mod_pow(mod_pow(m, self.e, self.n), self.d, self.n) != m:
                raise InvalidKeyPair("Private exponent does not invert the public exponent")

    @property
    def bits(self) -> int:
        return self.n.bit_length()

    def public_key(self) -> PublicKey:
        return PublicKey(self.n, self.e)

    def __repr__(self):
        return "KeyPair(bits=%d, e=%d)" % (self.bits, self.e)


def key_pair_from_rsa(private_key: rsa.PrivateKey) -> KeyPair:
    return KeyPair(n=private_key.n, e=private_key.e, d=private_key.d)


def load_key_pair(path: str, min_bits: int = 2048) -> KeyPair:
    """ Load a PEM-encoded PKCS#1 private key and reject moduli below min_bits. """
    with open(path, "rb") as key_file:
        key_data = key_file.read()
    key_pair = key_pair_from_rsa(rsa.PrivateKey.load_pkcs1(key_data))
    if key_pair.bits < min_bits:
        raise InvalidKeyPair("Key has %d bits, at least %d required" % (key_pair.bits, min_bits))
    return key_pair


def load_public_key(path: str) -> PublicKey:
    with open(path, "rb") as key_file:
        public = rsa.PublicKey.load_pkcs1(key_file.read())
    return PublicKey(public.n, public.e)
