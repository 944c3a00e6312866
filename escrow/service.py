import logging

from flask import Flask, jsonify, request

from blindsig.custom_exceptions import (
    BadIdentifier,
    EscrowError,
    KeyAlreadyConsumed,
    KeyAlreadyUsed,
    PayoutFailed,
    SignatureMismatch,
    UnknownKey,
    WrongValue,
)
from escrow.logic import EscrowLedger

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    WrongValue: 400,
    BadIdentifier: 400,
    SignatureMismatch: 403,
    UnknownKey: 404,
    KeyAlreadyUsed: 409,
    KeyAlreadyConsumed: 409,
    PayoutFailed: 502,
}


class MalformedRequest(ValueError):
    """ To be raised when a request body is missing fields or carries bad encodings. """
    pass


def int_to_hex(value: int, length: int) -> str:
    return value.to_bytes(length, "big").hex()


def hex_to_int(value) -> int:
    if not isinstance(value, str):
        raise MalformedRequest("Expected a hex string, found %s" % value.__class__.__name__)
    try:
        return int.from_bytes(bytes.fromhex(value), "big")
    except ValueError:
        raise MalformedRequest("Expected a hex string, found %r" % value[:32])


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise MalformedRequest("Request must be a JSON object.")
    return body


def _field(body: dict, name: str):
    if body.get(name) is None:
        raise MalformedRequest("Expected value for %s, found None" % name)
    return body[name]


def create_app(ledger: EscrowLedger) -> Flask:
    web = Flask("blind-escrow")
    modulus_len = (ledger.get_public_key().n.bit_length() + 7) // 8

    @web.errorhandler(MalformedRequest)
    def malformed_request(e):
        logger.warning("Malformed request to %s: %s", request.path, e)
        return jsonify({
            "status": "rejected",
            "error": "MalformedRequest",
            "message": str(e),
        }), 400

    @web.errorhandler(EscrowError)
    def escrow_error(e):
        status = next(
            (code for kind, code in _ERROR_STATUS.items() if isinstance(e, kind)), 400)
        return jsonify({
            "status": "rejected",
            "error": e.__class__.__name__,
            "message": str(e),
        }), status

    @web.errorhandler(404)
    def resource_not_found(e):
        return jsonify({
            "status": "Error 404: Endpoint not found.",
            "message": str(e)
        }), 404

    @web.route("/public-key", methods=["GET"])
    def public_key():
        n, e = ledger.get_public_key()
        key_len = (e.bit_length() + 7) // 8
        return jsonify({
            "key": int_to_hex(e, key_len),
            "key_len": key_len,
            "modulus": int_to_hex(n, modulus_len),
            "modulus_len": modulus_len,
            "unit": ledger.unit,
            "identifier_length": ledger.signer.identifier_length,
            "status": "success"
        })

    @web.route("/deposit", methods=["POST"])
    def deposit():
        body = _json_body()
        digest = hex_to_int(_field(body, "digest"))
        value = _field(body, "value")
        if not isinstance(value, int) or isinstance(value, bool):
            raise WrongValue("Deposit value must be an integer, found %r" % (value,))
        blinded = body.get("blinded", False)
        if not isinstance(blinded, bool):
            raise MalformedRequest("Expected a boolean for blinded, found %r" % (blinded,))
        key = ledger.deposit(digest, value, blinded=blinded)
        return jsonify({
            "key": int_to_hex(key, modulus_len),
            "status": "success"
        })

    @web.route("/redeem", methods=["POST"])
    def redeem():
        body = _json_body()
        raw_identifier = _field(body, "identifier")
        if not isinstance(raw_identifier, str):
            raise BadIdentifier("Identifier must be hex encoded")
        try:
            identifier = bytes.fromhex(raw_identifier)
        except ValueError:
            raise BadIdentifier("Identifier must be hex encoded")
        key = hex_to_int(_field(body, "key"))
        recipient = _field(body, "recipient")
        value = ledger.redeem(identifier, key, str(recipient))
        return jsonify({
            "value": value,
            "status": "success"
        })

    @web.route("/is-used/<key>", methods=["GET"])
    def is_used(key):
        return jsonify({
            "used": ledger.is_used(hex_to_int(key)),
            "status": "success"
        })

    @web.route("/stats", methods=["GET"])
    def stats():
        result = ledger.stats()
        result["status"] = "success"
        return jsonify(result)

    return web
