"""Unit tests for Stellar signature verification."""

import base64
import hashlib

from stellar_sdk import Keypair

from zkey.adapter.stellar import StellarSignatureVerifier, signed_message_digest
from tests.conftest import sign_nonce


class TestSignedMessageDigest:
    """Tests for the signed message digest."""

    def test_prefixes_message(self):
        expected = hashlib.sha256(b"Stellar Signed Message:\nabc").digest()

        assert signed_message_digest("abc") == expected


class TestStellarSignatureVerifier:
    """Tests for StellarSignatureVerifier."""

    def test_accepts_valid_signature(self):
        keypair = Keypair.random()

        assert StellarSignatureVerifier().verify(
            keypair.public_key, "nonce-1", sign_nonce(keypair, "nonce-1")
        )

    def test_rejects_raw_nonce_signature(self):
        """Wallets sign the prefixed digest, not the nonce bytes."""
        keypair = Keypair.random()
        signature = base64.b64encode(keypair.sign(b"nonce-1")).decode()

        assert not StellarSignatureVerifier().verify(
            keypair.public_key, "nonce-1", signature
        )

    def test_rejects_other_key(self):
        keypair = Keypair.random()

        assert not StellarSignatureVerifier().verify(
            Keypair.random().public_key, "nonce-1", sign_nonce(keypair, "nonce-1")
        )

    def test_rejects_malformed_base64(self):
        assert not StellarSignatureVerifier().verify(
            Keypair.random().public_key, "nonce-1", "%%%not-base64%%%"
        )

    def test_rejects_malformed_address(self):
        keypair = Keypair.random()

        assert not StellarSignatureVerifier().verify(
            "GNOTANADDRESS", "nonce-1", sign_nonce(keypair, "nonce-1")
        )

    def test_rejects_secret_seed_as_address(self):
        keypair = Keypair.random()

        assert not StellarSignatureVerifier().verify(
            keypair.secret, "nonce-1", sign_nonce(keypair, "nonce-1")
        )
