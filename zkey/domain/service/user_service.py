"""User domain service."""

from uuid import uuid4

import logfire

from zkey.domain.error import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnverifiedAccountError,
)
from zkey.domain.model import User
from zkey.domain.repository import UserRepository
from zkey.domain.value import OtpChannel, TenantId, UserId
from zkey.util.password import hash_password, verify_password

from .base import Clock, Service, utcnow


def _verified_field(channel: OtpChannel) -> str:
    return "email_verified" if channel == OtpChannel.EMAIL else "phone_verified"


class UserService(Service):
    """Domain service for user lookup, creation and credential checks."""

    def __init__(self, user_repository: UserRepository, clock: Clock = utcnow) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            clock: Source of the current time for timestamps
        """
        self.user_repository = user_repository
        self.clock = clock

    async def get_by_id(self, user_id: UserId) -> User:
        """Get an active user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found or soft-deleted
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user or not user.is_active:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_channel(
        self, identifier: str, channel: OtpChannel, tenant_id: TenantId | None
    ) -> list[User]:
        """Find active users holding an identifier on one channel.

        Args:
            identifier: Email address or phone number
            channel: Which field the identifier is matched against
            tenant_id: Tenant scope

        Returns:
            Matching users, most recently created first
        """
        if channel == OtpChannel.EMAIL:
            return await self.user_repository.find_active_by_email(identifier, tenant_id)
        return await self.user_repository.find_active_by_phone(identifier, tenant_id)

    async def find_by_identifier(
        self, identifier: str, tenant_id: TenantId | None
    ) -> list[User]:
        """Find active users holding an identifier as email or phone.

        Returns:
            Matching users, most recently created first
        """
        with logfire.span(
            "user_service.find_by_identifier",
            tenant_id=str(tenant_id) if tenant_id else None,
        ):
            by_email = await self.user_repository.find_active_by_email(
                identifier, tenant_id
            )
            by_phone = await self.user_repository.find_active_by_phone(
                identifier, tenant_id
            )
            users = {user.id: user for user in [*by_email, *by_phone]}
            return sorted(users.values(), key=lambda u: u.created_at, reverse=True)

    @staticmethod
    def is_verified_for(user: User, identifier: str) -> bool:
        """Whether the identifier is a verified channel of the user."""
        return (user.primary_email == identifier and user.email_verified) or (
            user.phone_number == identifier and user.phone_verified
        )

    async def find_by_wallet_address(self, address: str) -> User | None:
        """Get the active user whose profile carries a wallet address."""
        with logfire.span("user_service.find_by_wallet_address", address=address):
            return await self.user_repository.find_active_by_wallet_address(address)

    async def ensure_available(
        self,
        tenant_id: TenantId,
        email: str | None = None,
        phone_number: str | None = None,
        wallet_address: str | None = None,
    ) -> None:
        """Check that no active user already holds any of the identifiers.

        Raises:
            ConflictError: If an identifier is taken
        """
        with logfire.span("user_service.ensure_available", tenant_id=str(tenant_id)):
            if email and await self.user_repository.find_active_by_email(
                email, tenant_id
            ):
                logfire.info("Email already registered", tenant_id=str(tenant_id))
                raise ConflictError(
                    "This email is already registered. Please try another email or log in."
                )
            if phone_number and await self.user_repository.find_active_by_phone(
                phone_number, tenant_id
            ):
                logfire.info("Phone already registered", tenant_id=str(tenant_id))
                raise ConflictError(
                    "This phone number is already registered. Please try another phone number or log in."
                )
            if wallet_address and await self.user_repository.find_active_by_wallet_address(
                wallet_address
            ):
                logfire.info("Wallet already registered", address=wallet_address)
                raise ConflictError(
                    "This wallet address is already registered. Please try another wallet address or log in."
                )

    async def create_user(
        self,
        tenant_id: TenantId | None,
        email: str | None = None,
        phone_number: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        wallet_address: str | None = None,
        password: str | None = None,
        email_verified: bool = False,
        phone_verified: bool = False,
    ) -> User:
        """Create and persist a new user.

        Returns:
            Created user
        """
        with logfire.span(
            "user_service.create_user",
            tenant_id=str(tenant_id) if tenant_id else None,
        ):
            now = self.clock()
            user = User(
                id=UserId(uuid4()),
                tenant_id=tenant_id,
                primary_email=email,
                phone_number=phone_number,
                first_name=first_name,
                last_name=last_name,
                wallet_address=wallet_address,
                password_hash=hash_password(password) if password else None,
                email_verified=email_verified,
                phone_verified=phone_verified,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User created", user_id=str(saved.id))
            return saved

    async def find_restorable(
        self,
        tenant_id: TenantId,
        email: str | None = None,
        phone_number: str | None = None,
        wallet_address: str | None = None,
        wallet_owner_id: UserId | None = None,
    ) -> User | None:
        """Pick the soft-deleted account a registration should bring back.

        Each identifier may point at a deleted user of the tenant. They must
        all point at the same one. ``wallet_owner_id`` is the user an existing
        wallet identity belongs to: it has to be such a deleted user too,
        otherwise the wallet is taken.

        Returns:
            The deleted user to restore, None if the identifiers are fresh

        Raises:
            ConflictError: If the identifiers belong to different deleted users
                or the wallet identity belongs to an active or foreign user
        """
        with logfire.span("user_service.find_restorable", tenant_id=str(tenant_id)):
            found: User | None = None

            def claim(user: User, label: str) -> User:
                if found and found.id != user.id:
                    raise ConflictError(
                        f"A different deleted user already exists with this {label}."
                    )
                return user

            for label, criteria in (
                ("email", {"email": email}),
                ("phone number", {"phone_number": phone_number}),
                ("wallet address", {"wallet_address": wallet_address}),
            ):
                if not any(criteria.values()):
                    continue
                deleted = await self.user_repository.find_deleted(tenant_id, **criteria)
                if deleted:
                    found = claim(deleted[0], label)

            if wallet_owner_id:
                owner = await self.user_repository.find_by_id(wallet_owner_id)
                if not owner or owner.is_active or owner.tenant_id != tenant_id:
                    raise ConflictError(
                        "This wallet address is already registered. Please try another wallet address or log in."
                    )
                found = claim(owner, "wallet address")

            if found:
                logfire.info("Deleted account matches registration", user_id=str(found.id))
            return found

    async def restore_user(
        self,
        user: User,
        email: str | None = None,
        phone_number: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        wallet_address: str | None = None,
        password: str | None = None,
    ) -> User:
        """Bring a soft-deleted user back with freshly registered details.

        Identifiers and names are replaced, not merged, and both channels
        start unverified again.
        """
        with logfire.span("user_service.restore_user", user_id=str(user.id)):
            restored = user.model_copy(
                update={
                    "deleted_at": None,
                    "primary_email": email,
                    "phone_number": phone_number,
                    "first_name": first_name,
                    "last_name": last_name,
                    "wallet_address": wallet_address,
                    "password_hash": hash_password(password) if password else None,
                    "email_verified": False,
                    "phone_verified": False,
                    "updated_at": self.clock(),
                }
            )
            saved = await self.user_repository.save(restored)
            logfire.info("User restored", user_id=str(saved.id))
            return saved

    async def restore_for_channel(
        self, identifier: str, channel: OtpChannel, tenant_id: TenantId | None
    ) -> User | None:
        """Restore the newest deleted user holding an OTP-proven identifier.

        The channel the code was delivered on is marked verified, the other
        keeps its flag.

        Returns:
            The restored user, None if no deleted user matches
        """
        deleted = await self.user_repository.find_deleted(
            tenant_id, email=identifier, phone_number=identifier
        )
        if not deleted:
            return None
        with logfire.span(
            "user_service.restore_for_channel",
            user_id=str(deleted[0].id),
            channel=channel.value,
        ):
            restored = deleted[0].model_copy(
                update={
                    "deleted_at": None,
                    _verified_field(channel): True,
                    "updated_at": self.clock(),
                }
            )
            saved = await self.user_repository.save(restored)
            logfire.info("User restored on OTP verification", user_id=str(saved.id))
            return saved

    async def mark_channel_verified(self, user: User, channel: OtpChannel) -> User:
        """Set the verified flag of the channel an OTP was delivered on."""
        field = _verified_field(channel)
        if getattr(user, field):
            return user
        with logfire.span(
            "user_service.mark_channel_verified",
            user_id=str(user.id),
            channel=channel.value,
        ):
            updated = user.model_copy(update={field: True, "updated_at": self.clock()})
            return await self.user_repository.save(updated)

    async def authenticate(
        self, email: str, password: str, tenant_id: TenantId | None
    ) -> User:
        """Authenticate an email/password pair within a tenant.

        When several active accounts share the email, verified ones are tried
        first.

        Args:
            email: Primary email
            password: Plain-text password
            tenant_id: Tenant scope

        Returns:
            Authenticated user

        Raises:
            InvalidCredentialsError: If no account matches the pair
            UnverifiedAccountError: If the matching account has no verified channel
        """
        with logfire.span(
            "user_service.authenticate",
            tenant_id=str(tenant_id) if tenant_id else None,
        ):
            candidates = await self.user_repository.find_active_by_email(
                email, tenant_id
            )
            candidates.sort(
                key=lambda u: u.email_verified or u.phone_verified, reverse=True
            )
            for user in candidates:
                if user.password_hash and verify_password(user.password_hash, password):
                    if not (user.email_verified or user.phone_verified):
                        logfire.warn("Login with unverified account", user_id=str(user.id))
                        raise UnverifiedAccountError()
                    logfire.info("Password authenticated", user_id=str(user.id))
                    return user

            logfire.warn(
                "Invalid credentials",
                tenant_id=str(tenant_id) if tenant_id else None,
                candidates=len(candidates),
            )
            raise InvalidCredentialsError()

    async def update_profile(
        self,
        user_id: UserId,
        first_name: str | None = None,
        last_name: str | None = None,
        phone_number: str | None = None,
        wallet_address: str | None = None,
    ) -> User:
        """Update user profile fields. None leaves a field unchanged.

        A changed phone number loses its verified flag. An empty wallet
        address clears it.

        Raises:
            NotFoundError: If user not found
            ConflictError: If the new phone or wallet belongs to another user
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)

            updates: dict = {}
            if first_name is not None:
                updates["first_name"] = first_name
            if last_name is not None:
                updates["last_name"] = last_name
            if phone_number is not None and phone_number != user.phone_number:
                others = await self.user_repository.find_active_by_phone(
                    phone_number, user.tenant_id
                )
                if any(other.id != user.id for other in others):
                    raise ConflictError("This phone number is already registered.")
                updates["phone_number"] = phone_number
                updates["phone_verified"] = False
            if wallet_address is not None and wallet_address != user.wallet_address:
                if wallet_address:
                    owner = await self.user_repository.find_active_by_wallet_address(
                        wallet_address
                    )
                    if owner and owner.id != user.id:
                        raise ConflictError(
                            "This wallet address is already registered."
                        )
                updates["wallet_address"] = wallet_address or None

            if not updates:
                return user

            updates["updated_at"] = self.clock()
            saved = await self.user_repository.save(user.model_copy(update=updates))
            logfire.info(
                "Profile updated", user_id=str(user_id), fields=sorted(updates)
            )
            return saved

    async def set_wallet_address(self, user: User, address: str | None) -> User:
        """Set or clear the wallet address shown on the profile."""
        if user.wallet_address == address:
            return user
        updated = user.model_copy(
            update={"wallet_address": address, "updated_at": self.clock()}
        )
        return await self.user_repository.save(updated)
