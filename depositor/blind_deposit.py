from Crypto import Random

from blindsig.blind_signatures import (
    blind,
    hash_identifier,
    random_blind_factor,
    unblind,
    verify,
)
from blindsig.custom_exceptions import SignatureMismatch
from blindsig.keys import PublicKey


def generateIdentifier(length: int = 32) -> bytes:
    return Random.get_random_bytes(length)


def prepareDeposit(public_key: PublicKey, identifier: bytes, blinded: bool = True) -> dict:
    """ Hash the identifier and, unless a plain deposit is asked for, blind it.
        The returned dict holds the blind factor; it never leaves this process.
    """
    digest = hash_identifier(identifier, public_key.n, len(identifier))
    request = {
        "identifier": identifier,
        "plain_digest": digest,
        "digest": digest,
        "blinded": blinded,
        "r": None,
    }
    if blinded:
        r = random_blind_factor(public_key.n)
        request["r"] = r
        request["digest"] = blind(digest, r, public_key)
    return request


def finishDeposit(request: dict, key: int, public_key: PublicKey) -> int:
    """ Unblind the escrow's signature if needed and check it against the digest. """
    signature = key
    if request["blinded"]:
        signature = unblind(key, request["r"], public_key)
    if not verify(request["plain_digest"], signature, public_key):
        raise SignatureMismatch("The escrow signature does not verify against the identifier")
    return signature
