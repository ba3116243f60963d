"""Stellar wallet signature verification."""

from .verifier import StellarSignatureVerifier, signed_message_digest

__all__ = ["StellarSignatureVerifier", "signed_message_digest"]
