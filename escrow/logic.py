import logging

from blindsig.blind_signatures import BlindSigner
from blindsig.custom_exceptions import (
    KeyAlreadyConsumed,
    KeyAlreadyUsed,
    PayoutFailed,
    SignatureMismatch,
    UnknownKey,
    WrongValue,
)
from escrow.data import MemoryLedgerStore
from escrow.vault import Vault

logger = logging.getLogger(__name__)


def _short(key: int) -> str:
    return ("%x" % key)[:16]


class EscrowLedger:
    """
    Double-spend-prevention ledger for fixed-unit deposits.

    A deposit signs the submitted digest and escrows one unit; a redemption
    checks the presented key against the identifier's digest, marks the key
    used, and only then asks the vault to pay out. A payout failure leaves
    the key used and the unit in the vault.

    Keys obtained by unblinding a blind signature were never seen at deposit
    time. They are admitted on redemption when the signature verifies and at
    least one blinded deposit is still outstanding.
    """

    def __init__(self, signer: BlindSigner, vault: Vault, unit: int, store=None):
        if unit <= 0:
            raise ValueError("Escrow unit must be positive, found %d" % unit)
        self.signer = signer
        self.vault = vault
        self.unit = unit
        self.store = store if store is not None else MemoryLedgerStore()

    def get_public_key(self):
        return self.signer.public_key()

    def deposit(self, digest: int, value: int, blinded: bool = False) -> int:
        if value != self.unit:
            logger.warning("Rejected deposit of %s; escrow unit is %d", value, self.unit)
            raise WrongValue("Deposits must carry exactly %d, found %s" % (self.unit, value))
        key = self.signer.sign(digest)
        existing = self.store.get(key)
        if existing is not None and existing.used:
            logger.warning("Rejected deposit for consumed key %s", _short(key))
            raise KeyAlreadyConsumed("Key %s has already been redeemed" % _short(key))
        self.vault.escrow(value)
        entry = self.store.record_deposit(key, blinded=blinded)
        if entry is None:
            # a redemption consumed the key between the check and the record
            logger.error("Key %s consumed while depositing; %d stays in the vault", _short(key), value)
            raise KeyAlreadyConsumed("Key %s has already been redeemed" % _short(key))
        if entry.deposits > 1:
            logger.warning("Key %s now backs %d deposits", _short(key), entry.deposits)
        logger.info("Accepted %s deposit, key %s", "blinded" if blinded else "plain", _short(key))
        return key

    def redeem(self, identifier: bytes, key: int, recipient: str) -> int:
        entry = self.store.get(key)
        if entry is None and self.store.blind_units < 1:
            logger.warning("Rejected redemption of unknown key %s", _short(key))
            raise UnknownKey("Key %s was never issued" % _short(key))
        if entry is not None and entry.used:
            logger.warning("Rejected second redemption of key %s", _short(key))
            raise KeyAlreadyUsed("Key %s has already been redeemed" % _short(key))

        digest = self.signer.hash(identifier)
        if not self.signer.verify(digest, key):
            logger.warning("Key %s is not a signature over the presented identifier", _short(key))
            raise SignatureMismatch("Key does not sign the identifier's digest")

        if entry is None:
            committed = self.store.admit_unblinded(key)
            if not committed:
                entry = self.store.get(key)
                if entry is None:
                    raise UnknownKey("No outstanding blinded deposit backs key %s" % _short(key))
        if entry is not None:
            committed = self.store.mark_used(key)
        if not committed:
            logger.warning("Lost redemption race for key %s", _short(key))
            raise KeyAlreadyUsed("Key %s has already been redeemed" % _short(key))
        logger.info("Key %s marked used", _short(key))

        if not self.vault.release(self.unit, recipient):
            logger.error("Payout of %d to %s failed; key %s stays used", self.unit, recipient, _short(key))
            raise PayoutFailed("Vault refused to release %d to %s" % (self.unit, recipient))
        logger.info("Released %d to %s", self.unit, recipient)
        return self.unit

    def is_used(self, key: int) -> bool:
        entry = self.store.get(key)
        return entry is not None and entry.used

    def stats(self) -> dict:
        return {
            "entries": len(self.store),
            "used": self.store.used_count(),
            "blind_units": self.store.blind_units,
            "balance": self.vault.balance,
        }
