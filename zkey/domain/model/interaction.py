"""Interaction entity.

An interaction is the ephemeral, TTL-bound, single-use record that carries
authentication state across independent HTTP requests. Its ``details`` are a
tagged union over the three flows built on top of it:

- ``otp``: a one-time password sent to an email address or phone number
- ``wallet_challenge``: a nonce a wallet must sign to prove key possession
- ``oidc_login``: an authorization-code attempt, PENDING until a user logs
  in, then CONSENTED once ``code`` and ``user_id`` are attached

Expired interactions are inert; every read must filter on ``expires_at``.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import InteractionId, OtpChannel, UserId


class OtpDetails(DomainModel):
    """Payload of an ``otp`` interaction."""

    type: Literal["otp"] = "otp"
    identifier: str
    method: OtpChannel
    code: str
    client_id: Optional[str] = None


class WalletChallengeDetails(DomainModel):
    """Payload of a ``wallet_challenge`` interaction."""

    type: Literal["wallet_challenge"] = "wallet_challenge"
    address: str
    nonce: str


class OidcLoginDetails(DomainModel):
    """Payload of an ``oidc_login`` interaction."""

    type: Literal["oidc_login"] = "oidc_login"
    client_id: str
    redirect_uri: str
    scope: str
    state: Optional[str] = None
    nonce: Optional[str] = None

    # Attached once the user has authenticated
    code: Optional[str] = None
    user_id: Optional[UserId] = None

    @property
    def is_consented(self) -> bool:
        """Whether an authorization code has been issued."""
        return self.code is not None


InteractionDetails = Annotated[
    Union[OtpDetails, WalletChallengeDetails, OidcLoginDetails],
    Field(discriminator="type"),
]

interaction_details_adapter: TypeAdapter[InteractionDetails] = TypeAdapter(
    InteractionDetails
)


class Interaction(DomainModel):
    """Ephemeral single-use record threading state across requests."""

    id: InteractionId
    details: InteractionDetails
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def type(self) -> str:
        """Tag of the details payload."""
        return self.details.type

    def is_active(self, now: datetime | None = None) -> bool:
        """Whether the interaction has not yet expired."""
        return self.expires_at > (now or utc_now())
