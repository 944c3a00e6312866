import json
import sys

from withdrawer.withdrawer_logic import TokenRejected, redeem_token


def redeemToken(modifiers):
    if len(modifiers) < 2:
        print("Usage: python -m withdrawer redeem <token file> <recipient>")
        sys.exit(2)
    token_path, recipient = modifiers[0], modifiers[1]
    with open(token_path) as token_input:
        claim = json.load(token_input)
    try:
        value = redeem_token(claim, recipient)
    except TokenRejected as e:
        print("Escrow response: %s" % e)
        sys.exit(1)
    print("Redeemed %d to %s" % (value, recipient))


if __name__ == "__main__":
    try:
        command = sys.argv[1]
    except IndexError:
        command = "redeem"
    {
        "redeem": redeemToken,
    }[command](sys.argv[2:])
