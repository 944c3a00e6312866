"""
Key pair tests
"""

import pytest

from blindsig.custom_exceptions import InvalidKeyPair
from blindsig.keys import KeyPair, PublicKey, load_key_pair, load_public_key


class TestKeyPair:
    """Tests for KeyPair."""

    def test_public_key(self, toy_key_pair):
        public_key = toy_key_pair.public_key()
        assert public_key == PublicKey(187, 7)
        n, e = public_key
        assert (n, e) == (187, 7)

    def test_immutable(self, toy_key_pair):
        with pytest.raises(AttributeError):
            toy_key_pair.d = 3

    def test_rejects_mismatched_exponents(self):
        with pytest.raises(InvalidKeyPair):
            KeyPair(n=187, e=7, d=24)

    def test_rejects_exponent_that_only_inverts_base_two(self):
        # 2 has order 40 mod 187, so d = 23 + 40 still round-trips 2 but not 3
        assert pow(pow(2, 7, 187), 63, 187) == 2
        with pytest.raises(InvalidKeyPair):
            KeyPair(n=187, e=7, d=63)

    @pytest.mark.parametrize("n,e,d", [(0, 7, 23), (187, -7, 23), (187, 7, 0)])
    def test_rejects_non_positive(self, n, e, d):
        with pytest.raises(InvalidKeyPair):
            KeyPair(n=n, e=e, d=d)

    def test_repr_hides_private_exponent(self, toy_key_pair):
        assert "23" not in repr(toy_key_pair)


class TestLoading:
    """Tests for PEM loading."""

    def test_load_private_key(self, tmp_path, rsa_private_key):
        path = tmp_path / "escrow.pem"
        path.write_bytes(rsa_private_key.save_pkcs1("PEM"))
        key_pair = load_key_pair(str(path), min_bits=512)
        assert key_pair.n == rsa_private_key.n
        assert key_pair.e == rsa_private_key.e
        assert key_pair.d == rsa_private_key.d

    def test_rejects_small_modulus(self, tmp_path, rsa_private_key):
        path = tmp_path / "escrow.pem"
        path.write_bytes(rsa_private_key.save_pkcs1("PEM"))
        with pytest.raises(InvalidKeyPair):
            load_key_pair(str(path))

    def test_load_public_key(self, tmp_path, rsa_private_key):
        import rsa
        public = rsa.PublicKey(rsa_private_key.n, rsa_private_key.e)
        path = tmp_path / "escrow.pub"
        path.write_bytes(public.save_pkcs1("PEM"))
        assert load_public_key(str(path)) == PublicKey(rsa_private_key.n, rsa_private_key.e)
