import logging

import requests

from blindsig.blind_signatures import hash_identifier, verify
from blindsig.keys import PublicKey

logger = logging.getLogger(__name__)


class TokenRejected(ValueError):
    """ To be raised when the escrow refuses a redemption. """
    pass


def check_token(claim: dict, public_key: PublicKey) -> bool:
    identifier = bytes.fromhex(claim["identifier"])
    signature = int.from_bytes(bytes.fromhex(claim["key"]), "big")
    digest = hash_identifier(identifier, public_key.n, len(identifier))
    return verify(digest, signature, public_key)


def redeem_token(claim: dict, recipient: str) -> int:
    address = claim["bank-address"]
    print("Fetching keys from escrow...")
    response = requests.get(address + "/public-key")
    response.raise_for_status()
    data = response.json()
    public_key = PublicKey(
        int.from_bytes(bytes.fromhex(data.get("modulus")), "big"),
        int.from_bytes(bytes.fromhex(data.get("key")), "big"),
    )
    print("Validating escrow signature...")
    if not check_token(claim, public_key):
        raise TokenRejected("The escrow signature on this token does not match its identifier.")
    print("Signature good.")

    response = requests.post(address + "/redeem", json={
        "identifier": claim["identifier"],
        "key": claim["key"],
        "recipient": recipient,
    })
    if not response.ok:
        try:
            body = response.json()
        except ValueError:
            logger.warning("Redemption rejected with status %d", response.status_code)
            raise TokenRejected("HTTP %d: %s" % (response.status_code, response.text[:200]))
        logger.warning("Redemption rejected: %s", body.get("error"))
        raise TokenRejected("%s: %s" % (body.get("error"), body.get("message")))
    return response.json()["value"]
