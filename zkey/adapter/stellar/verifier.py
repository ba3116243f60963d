"""Stellar wallet signature verification.

Wallets sign challenges the way Stellar wallets sign arbitrary messages:
an Ed25519 signature over ``sha256("Stellar Signed Message:\\n" + nonce)``,
transported as base64. The public key is recovered from the ``G...``
account address.
"""

import base64
import binascii
import hashlib

import logfire
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from stellar_sdk import StrKey

from zkey.domain.service.wallet_service import SignatureVerifier
from zkey.domain.value import IdentityProvider

SIGNED_MESSAGE_PREFIX = "Stellar Signed Message:\n"


def signed_message_digest(message: str) -> bytes:
    """Digest a wallet signs for an arbitrary text message."""
    return hashlib.sha256((SIGNED_MESSAGE_PREFIX + message).encode("utf-8")).digest()


class StellarSignatureVerifier(SignatureVerifier):
    """Verifies Ed25519 signatures made by Stellar account keys."""

    provider = IdentityProvider.STELLAR

    def verify(self, address: str, nonce: str, signature: str) -> bool:
        try:
            raw_key = StrKey.decode_ed25519_public_key(address)
            raw_signature = base64.b64decode(signature, validate=True)
            Ed25519PublicKey.from_public_bytes(raw_key).verify(
                raw_signature, signed_message_digest(nonce)
            )
        except (ValueError, binascii.Error, InvalidSignature) as e:
            # Reason stays server-side
            logfire.info(
                "Stellar signature verification failed",
                address=address,
                reason=type(e).__name__,
            )
            return False
        return True
