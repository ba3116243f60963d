"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. JSONB columns are
validated back into their value types on the way out, so a malformed
interaction payload fails at the storage boundary.
"""

from typing import Any, Dict
from uuid import UUID

from zkey.domain.model import (
    Application,
    Interaction,
    RefreshToken,
    Tenant,
    User,
    UserIdentity,
)
from zkey.domain.model.interaction import interaction_details_adapter
from zkey.domain.value import (
    ApplicationId,
    AuthMethods,
    IdentityProvider,
    InteractionId,
    ProviderCredentials,
    RefreshTokenId,
    TenantId,
    UserId,
    UserIdentityId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_tenant(row: Dict[str, Any]) -> Tenant:
    """Convert database row to Tenant domain model."""
    return Tenant(
        id=TenantId(_uuid(row["id"])),
        name=row["name"],
        slug=row["slug"],
        logo=row.get("logo"),
        login_url=row.get("login_url"),
        integrations=ProviderCredentials.model_validate(row.get("integrations") or {}),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tenant_to_dict(tenant: Tenant) -> Dict[str, Any]:
    """Convert Tenant domain model to database dict."""
    data = tenant.model_dump()
    data["integrations"] = tenant.integrations.model_dump(mode="json", exclude_none=True)
    return data


def row_to_application(row: Dict[str, Any]) -> Application:
    """Convert database row to Application domain model."""
    return Application(
        id=ApplicationId(_uuid(row["id"])),
        tenant_id=TenantId(_uuid(row["tenant_id"])),
        name=row["name"],
        client_id=row["client_id"],
        client_secret=row.get("client_secret"),
        redirect_uris=list(row.get("redirect_uris") or []),
        description=row.get("description"),
        logo=row.get("logo"),
        auth_methods=AuthMethods.model_validate(row.get("auth_methods") or {}),
        integrations=ProviderCredentials.model_validate(row.get("integrations") or {}),
        refresh_token_ttl_days=row.get("refresh_token_ttl_days"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def application_to_dict(application: Application) -> Dict[str, Any]:
    """Convert Application domain model to database dict."""
    data = application.model_dump()
    data["auth_methods"] = application.auth_methods.model_dump(mode="json")
    data["integrations"] = application.integrations.model_dump(
        mode="json", exclude_none=True
    )
    return data


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    tenant_id = _optional_uuid(row.get("tenant_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        tenant_id=TenantId(tenant_id) if tenant_id else None,
        primary_email=row.get("primary_email"),
        phone_number=row.get("phone_number"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        wallet_address=row.get("wallet_address"),
        password_hash=row.get("password_hash"),
        email_verified=row["email_verified"],
        phone_verified=row["phone_verified"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_user_identity(row: Dict[str, Any]) -> UserIdentity:
    """Convert database row to UserIdentity domain model."""
    return UserIdentity(
        id=UserIdentityId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=IdentityProvider(row["provider"]),
        provider_id=row["provider_id"],
        created_at=row["created_at"],
    )


def user_identity_to_dict(identity: UserIdentity) -> Dict[str, Any]:
    """Convert UserIdentity domain model to database dict."""
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_interaction(row: Dict[str, Any]) -> Interaction:
    """Convert database row to Interaction domain model.

    Raises:
        pydantic.ValidationError: If the stored details do not match their type tag
    """
    return Interaction(
        id=InteractionId(_uuid(row["id"])),
        details=interaction_details_adapter.validate_python(row["details"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def interaction_to_dict(interaction: Interaction) -> Dict[str, Any]:
    """Convert Interaction domain model to database dict."""
    return {
        "id": interaction.id,
        "type": interaction.type,
        "details": interaction.details.model_dump(mode="json"),
        "expires_at": interaction.expires_at,
        "created_at": interaction.created_at,
    }


def row_to_refresh_token(row: Dict[str, Any]) -> RefreshToken:
    """Convert database row to RefreshToken domain model."""
    return RefreshToken(
        id=RefreshTokenId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        client_id=row.get("client_id"),
        token_hash=row["token_hash"],
        scopes=list(row.get("scopes") or []),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def refresh_token_to_dict(refresh_token: RefreshToken) -> Dict[str, Any]:
    """Convert RefreshToken domain model to database dict."""
    return refresh_token.model_dump()
