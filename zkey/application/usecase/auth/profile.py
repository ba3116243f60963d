"""Profile use cases."""

from pydantic import Field

from zkey.application.usecase.base import CamelModel
from zkey.domain.model import User
from zkey.domain.service import UserService
from zkey.domain.value import UserId


class ProfileResponse(CamelModel):
    """Profile of the authenticated user."""

    id: str
    tenant_id: str | None
    first_name: str | None
    last_name: str | None
    primary_email: str | None
    email_verified: bool
    phone_number: str | None
    phone_verified: bool
    wallet_address: str | None

    @classmethod
    def from_user(cls, user: User) -> "ProfileResponse":
        return cls(
            id=str(user.id),
            tenant_id=str(user.tenant_id) if user.tenant_id else None,
            first_name=user.first_name,
            last_name=user.last_name,
            primary_email=user.primary_email,
            email_verified=user.email_verified,
            phone_number=user.phone_number,
            phone_verified=user.phone_verified,
            wallet_address=user.wallet_address,
        )


class GetProfileUseCase:
    """Use case for reading the authenticated user's profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, user_id: UserId) -> ProfileResponse:
        """Raises NotFoundError if the user no longer exists."""
        user = await self.user_service.get_by_id(user_id)
        return ProfileResponse.from_user(user)


class UpdateProfileRequest(CamelModel):
    """Profile fields the user may change. Omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    wallet_address: str | None = Field(default=None, max_length=255)


class UpdateProfileUseCase:
    """Use case for updating the authenticated user's profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(
        self, user_id: UserId, request: UpdateProfileRequest
    ) -> ProfileResponse:
        """Apply the update and return the new profile.

        Raises:
            NotFoundError: If the user no longer exists
            ConflictError: If the phone or wallet belongs to another user
        """
        user = await self.user_service.update_profile(
            user_id,
            first_name=request.first_name,
            last_name=request.last_name,
            phone_number=request.phone,
            wallet_address=request.wallet_address,
        )
        return ProfileResponse.from_user(user)
