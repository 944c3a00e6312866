from blindsig.blind_signatures import BlindSigner
from blindsig.keys import load_key_pair
from escrow.config import EscrowConfig
from escrow.data import LedgerEntry, MemoryLedgerStore
from escrow.logic import EscrowLedger
from escrow.vault import MemoryVault, Vault


def build_ledger(config: EscrowConfig, store=None, vault=None) -> EscrowLedger:
    """ Construct the process-wide ledger from a loaded configuration. """
    if not config.key_file:
        raise ValueError("ESCROW_KEY_FILE must name a PEM private key")
    key_pair = load_key_pair(config.key_file, min_bits=config.min_key_bits)
    signer = BlindSigner(key_pair, identifier_length=config.identifier_length)
    if vault is None:
        vault = MemoryVault(refused_recipients=config.refused_recipients)
    return EscrowLedger(signer, vault, config.unit, store=store)
