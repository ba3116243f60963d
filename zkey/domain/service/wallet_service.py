"""Wallet challenge-response login flow."""

import secrets
from abc import ABC, abstractmethod

import logfire

from zkey.config import InteractionSettings
from zkey.domain.error import ChallengeNotFoundError, SignatureInvalidError
from zkey.domain.model import Interaction, User, WalletChallengeDetails
from zkey.domain.value import IdentityProvider, InteractionType, UserId

from .base import Service
from .interaction_service import InteractionService
from .token_service import TokenPair, TokenService
from .user_identity_service import UserIdentityService
from .user_service import UserService


class SignatureVerifier(ABC):
    """Verifies a wallet's signature over a challenge nonce."""

    provider: IdentityProvider

    @abstractmethod
    def verify(self, address: str, nonce: str, signature: str) -> bool:
        """Check a signature over a nonce against the key encoded in the address.

        Implementations return False for every failure, including malformed
        addresses and signatures, and never raise.
        """
        pass


class WalletService(Service):
    """Issues signing nonces and logs wallets in by signature."""

    def __init__(
        self,
        interaction_service: InteractionService,
        user_service: UserService,
        user_identity_service: UserIdentityService,
        token_service: TokenService,
        signature_verifier: SignatureVerifier,
        interaction_settings: InteractionSettings,
    ) -> None:
        self.interaction_service = interaction_service
        self.user_service = user_service
        self.user_identity_service = user_identity_service
        self.token_service = token_service
        self.signature_verifier = signature_verifier
        self.interaction_settings = interaction_settings

    @property
    def provider(self) -> IdentityProvider:
        return self.signature_verifier.provider

    async def issue_nonce(self, address: str) -> str:
        """Create a challenge for the address and return its nonce.

        Args:
            address: Wallet public key

        Returns:
            Random nonce the wallet must sign
        """
        with logfire.span("wallet_service.issue_nonce", address=address):
            nonce = secrets.token_urlsafe(32)
            await self.interaction_service.create(
                WalletChallengeDetails(address=address, nonce=nonce),
                ttl_seconds=self.interaction_settings.wallet_challenge_ttl_seconds,
            )
            return nonce

    async def verify_challenge(self, address: str, signature: str) -> Interaction:
        """Verify a signature against the newest challenge and consume it.

        Args:
            address: Wallet public key
            signature: Signature over the challenge nonce

        Returns:
            The consumed challenge

        Raises:
            ChallengeNotFoundError: If no active challenge exists for the address
            SignatureInvalidError: If the signature does not verify or the
                challenge was consumed concurrently
        """
        with logfire.span("wallet_service.verify_challenge", address=address):
            interaction = await self.interaction_service.find_active_by_predicate(
                InteractionType.WALLET_CHALLENGE,
                lambda details: details.address == address,
            )
            if not interaction:
                raise ChallengeNotFoundError()

            details: WalletChallengeDetails = interaction.details
            if not self.signature_verifier.verify(address, details.nonce, signature):
                logfire.warn("Wallet signature rejected", address=address)
                raise SignatureInvalidError()

            consumed = await self.interaction_service.consume(interaction.id)
            if not consumed:
                raise SignatureInvalidError()

            logfire.info("Wallet challenge verified", address=address)
            return consumed

    async def login(self, address: str, signature: str) -> TokenPair:
        """Log a wallet in, creating its user on first contact.

        Raises:
            ChallengeNotFoundError: If no active challenge exists for the address
            SignatureInvalidError: If the signature does not verify
        """
        with logfire.span("wallet_service.login", address=address):
            await self.verify_challenge(address, signature)
            user = await self._find_or_create_user(address)
            return await self.token_service.generate_tokens(user.id)

    async def _find_or_create_user(self, address: str) -> User:
        identity = await self.user_identity_service.get_identity_by_provider(
            self.provider, address
        )
        if identity:
            return await self.user_service.get_by_id(identity.user_id)

        # Wallets set on the profile before an identity row existed
        user = await self.user_service.find_by_wallet_address(address)
        if user:
            logfire.info("Backfilling wallet identity", user_id=str(user.id))
        else:
            user = await self.user_service.create_user(
                tenant_id=None, wallet_address=address
            )
            logfire.info("User created on wallet login", user_id=str(user.id))

        await self.user_identity_service.link(user.id, self.provider, address)
        return user

    async def unlink(self, user_id: UserId) -> None:
        """Remove the wallet identities and profile wallet of a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("wallet_service.unlink", user_id=str(user_id)):
            user = await self.user_service.get_by_id(user_id)
            await self.user_identity_service.unlink_all(user.id, self.provider)
            await self.user_service.set_wallet_address(user, None)
