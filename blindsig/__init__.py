from blindsig.keys import KeyPair, PublicKey, load_key_pair, load_public_key
from blindsig.blind_signatures import (
    IDENTIFIER_LENGTH,
    BlindSigner,
    blind,
    hash_identifier,
    mod_pow,
    modulo_multiplicative_inverse,
    random_blind_factor,
    unblind,
    verify,
)
