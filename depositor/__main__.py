import json
import sys

import requests

from blindsig.keys import PublicKey
from depositor.blind_deposit import finishDeposit, generateIdentifier, prepareDeposit
from escrow.config import client_url


def fetchPublicKey(address: str):
    response = requests.get(address + "/public-key")
    response.raise_for_status()
    data = response.json()
    e = int.from_bytes(bytes.fromhex(data.get("key")), "big")
    n = int.from_bytes(bytes.fromhex(data.get("modulus")), "big")
    return PublicKey(n, e), data


def makeDeposit(modifiers):
    address = client_url()
    token_path = modifiers[0] if modifiers else "escrow_token.json"
    blinded = "plain" not in modifiers[1:]

    public_key, data = fetchPublicKey(address)
    n_len = data.get("modulus_len")
    identifier = generateIdentifier(data.get("identifier_length", 32))
    request = prepareDeposit(public_key, identifier, blinded=blinded)
    print("Depositing %d against %s digest %s" % (
        data.get("unit"), "blinded" if blinded else "plain", ("%x" % request["digest"])[:16]))

    response = requests.post(address + "/deposit", json={
        "digest": request["digest"].to_bytes(n_len, "big").hex(),
        "value": data.get("unit"),
        "blinded": blinded,
    })
    if not response.ok:
        print("Deposit failed: \n" + response.text)
        sys.exit(1)
    key = int.from_bytes(bytes.fromhex(response.json()["key"]), "big")
    signature = finishDeposit(request, key, public_key)

    token = {
        "identifier": identifier.hex(),
        "key": signature.to_bytes(n_len, "big").hex(),
        "bank-address": address,
    }
    with open(token_path, "w+") as token_output:
        json.dump(token, token_output, indent=4)
    print("Escrow signature: " + token["key"][:16])
    print("Redeemable token written to %s" % token_path)


def checkToken(modifiers):
    token_path = modifiers[0] if modifiers else "escrow_token.json"
    with open(token_path) as token_input:
        token = json.load(token_input)
    response = requests.get(token["bank-address"] + "/is-used/" + token["key"])
    response.raise_for_status()
    used = response.json()["used"]
    print("Token %s is %s" % (token["key"][:16], "already redeemed" if used else "unused"))
    return used


if __name__ == "__main__":
    try:
        command = sys.argv[1]
    except IndexError:
        command = "deposit"
    modifiers = sys.argv[2:]
    {
        "deposit": makeDeposit,
        "check": checkToken,
    }[command](modifiers)
