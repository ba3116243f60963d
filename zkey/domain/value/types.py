"""Domain value objects for ZKey.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from zkey.domain.value.common import ValueObject


class InteractionType(str, Enum):
    """Tag of an interaction's details payload."""

    OTP = "otp"
    WALLET_CHALLENGE = "wallet_challenge"
    OIDC_LOGIN = "oidc_login"


class OtpChannel(str, Enum):
    """Delivery channel for one-time passwords."""

    EMAIL = "email"
    PHONE = "phone"


class IdentityProvider(str, Enum):
    """External credential namespaces users can be linked to."""

    STELLAR = "stellar"


class AuthMethods(ValueObject):
    """Login methods an application offers on the hosted login surface."""

    password: bool = True
    email_otp: bool = False
    sms_otp: bool = False
    wallet: bool = False


class EmailCredentials(ValueObject):
    """Credentials for the transactional email gateway."""

    api_key: str
    sender_email: str
    sender_name: str | None = None


class SmsCredentials(ValueObject):
    """Credentials for the SMS gateway."""

    user: str
    api_key: str
    sender_id: str | None = None
    endpoint: str | None = None


class ProviderCredentials(ValueObject):
    """Notification provider credentials carried by a tenant or application.

    Every field is optional: a tier that does not configure a provider
    defers to the next tier in the resolution chain.
    """

    email_api_key: str | None = None
    email_sender: str | None = None
    email_sender_name: str | None = None
    sms_api_key: str | None = None
    sms_user: str | None = None
    sms_sender_id: str | None = None
    sms_endpoint: str | None = None

    def email(self) -> EmailCredentials | None:
        """Return the email credential set, if complete."""
        if not self.email_api_key or not self.email_sender:
            return None
        return EmailCredentials(
            api_key=self.email_api_key,
            sender_email=self.email_sender,
            sender_name=self.email_sender_name,
        )

    def sms(self) -> SmsCredentials | None:
        """Return the SMS credential set, if complete."""
        if not self.sms_api_key or not self.sms_user:
            return None
        return SmsCredentials(
            user=self.sms_user,
            api_key=self.sms_api_key,
            sender_id=self.sms_sender_id,
            endpoint=self.sms_endpoint,
        )
