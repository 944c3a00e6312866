class EscrowError(ValueError):
    """ Base class for every failure the escrow core reports to a caller. """
    pass


class InvalidKeyPair(EscrowError):
    """ To be raised when the provided key pair does not round-trip a signature. """
    pass


class BadIdentifier(EscrowError):
    """ To be raised when an identifier is not a byte string of the expected length. """
    pass


class InvalidBlindFactor(EscrowError):
    """ To be raised when a blind factor is out of (1, N) or shares a factor with N. """
    pass


class NoInverseExists(EscrowError):
    """ To be raised when a value has no multiplicative inverse under the modulus. """
    pass


class WrongValue(EscrowError):
    """ To be raised when a deposit does not carry exactly one escrow unit. """
    pass


class KeyAlreadyConsumed(EscrowError):
    """ To be raised when a deposit produces a key that has already been redeemed. """
    pass


class UnknownKey(EscrowError):
    """ To be raised when a key is presented for redemption that the ledger never issued. """
    pass


class KeyAlreadyUsed(EscrowError):
    """ To be raised when a key is provided for redemption a second time. """
    pass


class SignatureMismatch(EscrowError):
    """ To be raised when the key is not a valid signature over the identifier's digest. """
    pass


class PayoutFailed(EscrowError):
    """ To be raised when the vault refuses to release funds for a key already marked used. """
    pass
