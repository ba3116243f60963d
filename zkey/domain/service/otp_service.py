"""One-time password login flow."""

import secrets

import logfire

from zkey.config import InteractionSettings
from zkey.domain.error import InvalidOrExpiredCodeError, NotFoundError
from zkey.domain.model import Application, OtpDetails, Tenant, User
from zkey.domain.value import InteractionType, OtpChannel

from .base import Service
from .interaction_service import InteractionService
from .notification_service import NotificationService
from .tenant_service import TenantService
from .token_service import TokenPair, TokenService
from .user_service import UserService


def generate_otp_code() -> str:
    """Uniformly random six-digit code, leading zeros preserved."""
    return f"{secrets.randbelow(1_000_000):06d}"


class OtpService(Service):
    """Issues OTP codes over email or SMS and exchanges them for tokens."""

    def __init__(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        notification_service: NotificationService,
        token_service: TokenService,
        interaction_settings: InteractionSettings,
    ) -> None:
        self.interaction_service = interaction_service
        self.tenant_service = tenant_service
        self.user_service = user_service
        self.notification_service = notification_service
        self.token_service = token_service
        self.interaction_settings = interaction_settings

    async def request_code(
        self, identifier: str, channel: OtpChannel, client_reference: str
    ) -> None:
        """Issue a code to an existing user and deliver it.

        Missing gateway credentials are logged and otherwise ignored: the
        caller still sees success and the code is never delivered.

        Args:
            identifier: Email address or phone number
            channel: Delivery channel, also the field ``identifier`` is matched on
            client_reference: OAuth client ID or an interaction ID carrying one

        Raises:
            NotFoundError: If the application or the user does not exist
        """
        with logfire.span("otp_service.request_code", channel=channel.value):
            client_id = await self.interaction_service.resolve_client_id(
                client_reference
            )
            application, tenant = await self.tenant_service.resolve_client(client_id)

            users = await self.user_service.find_by_channel(
                identifier, channel, application.tenant_id
            )
            if not users:
                logfire.warn(
                    "OTP requested for unknown user",
                    channel=channel.value,
                    client_id=client_id,
                )
                raise NotFoundError("User", identifier)

            code = generate_otp_code()
            ttl = self.interaction_settings.otp_ttl_seconds
            await self.interaction_service.create(
                OtpDetails(
                    identifier=identifier,
                    method=channel,
                    code=code,
                    client_id=client_id,
                ),
                ttl_seconds=ttl,
            )

            await self._deliver(application, tenant, identifier, channel, code, ttl)

    async def _deliver(
        self,
        application: Application,
        tenant: Tenant,
        identifier: str,
        channel: OtpChannel,
        code: str,
        ttl_seconds: int,
    ) -> None:
        message = (
            f"Your {application.name} verification code is: {code}. "
            f"It expires in {ttl_seconds // 60} minutes."
        )

        if channel == OtpChannel.EMAIL:
            email_credentials = self.tenant_service.resolve_email_credentials(
                application, tenant
            )
            if not email_credentials:
                logfire.error(
                    "Email credentials missing, OTP not delivered",
                    application=application.name,
                    tenant=tenant.name,
                )
                return
            await self.notification_service.send_email(
                email_credentials,
                to=identifier,
                subject=f"{application.name} Verification Code",
                text=message,
            )
        else:
            sms_credentials = self.tenant_service.resolve_sms_credentials(
                application, tenant
            )
            if not sms_credentials:
                logfire.error(
                    "SMS credentials missing, OTP not delivered",
                    application=application.name,
                    tenant=tenant.name,
                )
                return
            await self.notification_service.send_sms(
                sms_credentials, to=identifier, text=message
            )

    async def verify_code(self, identifier: str, code: str) -> TokenPair:
        """Exchange a delivered code for tokens.

        The newest active OTP interaction matching both identifier and code is
        consumed. The user is then found, restored from a soft delete or
        created in the application's tenant, with the delivery channel
        marked verified.

        Raises:
            InvalidOrExpiredCodeError: For any mismatch, expiry or replay
        """
        with logfire.span("otp_service.verify_code"):
            interaction = await self.interaction_service.find_active_by_predicate(
                InteractionType.OTP,
                lambda details: details.identifier == identifier
                and secrets.compare_digest(details.code.encode(), code.encode()),
            )
            if not interaction:
                raise InvalidOrExpiredCodeError()

            if not await self.interaction_service.consume(interaction.id):
                raise InvalidOrExpiredCodeError()

            details: OtpDetails = interaction.details
            application = (
                await self.tenant_service.get_application(details.client_id)
                if details.client_id
                else None
            )
            user = await self._find_or_create_user(
                identifier, details.method, application
            )
            return await self.token_service.generate_tokens(user.id, application)

    async def _find_or_create_user(
        self,
        identifier: str,
        channel: OtpChannel,
        application: Application | None,
    ) -> User:
        tenant_id = application.tenant_id if application else None
        users = await self.user_service.find_by_identifier(identifier, tenant_id)

        # An already verified account wins over pending ones
        for user in users:
            if self.user_service.is_verified_for(user, identifier):
                logfire.info("OTP verified for verified user", user_id=str(user.id))
                return user

        if users:
            user = await self.user_service.mark_channel_verified(users[0], channel)
            logfire.info("OTP verified, channel marked", user_id=str(user.id))
            return user

        restored = await self.user_service.restore_for_channel(
            identifier, channel, tenant_id
        )
        if restored:
            return restored

        is_email = channel == OtpChannel.EMAIL
        user = await self.user_service.create_user(
            tenant_id=tenant_id,
            email=identifier if is_email else None,
            phone_number=None if is_email else identifier,
            first_name="New",
            last_name="User",
            email_verified=is_email,
            phone_verified=not is_email,
        )
        logfire.info("User created on OTP verification", user_id=str(user.id))
        return user
