"""SQLAlchemy table definitions for ZKey.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TENANTS TABLE
# ============================================================================
tenants_table = Table(
    "tenants",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("logo", Text, nullable=True),
    Column("login_url", Text, nullable=True),
    Column("integrations", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# APPLICATIONS TABLE (OAuth clients)
# ============================================================================
applications_table = Table(
    "applications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "tenant_id", UUID, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("name", String(255), nullable=False),
    Column("client_id", String(255), nullable=False, unique=True),
    Column("client_secret", String(255), nullable=True),
    Column("redirect_uris", ARRAY(Text), nullable=False, server_default="{}"),
    Column("description", Text, nullable=True),
    Column("logo", Text, nullable=True),
    Column("auth_methods", JSONB, nullable=False, server_default="{}"),
    Column("integrations", JSONB, nullable=False, server_default="{}"),
    Column("refresh_token_ttl_days", Integer, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_applications_tenant_id", applications_table.c.tenant_id)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "tenant_id", UUID, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=True
    ),
    Column("primary_email", String(255), nullable=True),
    Column("phone_number", String(50), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("wallet_address", String(255), nullable=True),
    Column("password_hash", Text, nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("phone_verified", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_users_tenant_email", users_table.c.tenant_id, users_table.c.primary_email)
Index("idx_users_tenant_phone", users_table.c.tenant_id, users_table.c.phone_number)
Index("idx_users_wallet_address", users_table.c.wallet_address)

# ============================================================================
# USER IDENTITIES TABLE (external credential namespaces)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'stellar'
    Column("provider_id", String(255), nullable=False),  # Wallet public key
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_id", name="uq_provider_identity"),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)

# ============================================================================
# INTERACTIONS TABLE (ephemeral, single-use flow state)
# ============================================================================
interactions_table = Table(
    "interactions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("type", String(32), nullable=False),  # Mirrors details->>'type'
    Column("details", JSONB, nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_interactions_expires_at", interactions_table.c.expires_at)
Index(
    "idx_interactions_type_expires_at",
    interactions_table.c.type,
    interactions_table.c.expires_at,
)

# ============================================================================
# REFRESH TOKENS TABLE
# ============================================================================
refresh_tokens_table = Table(
    "refresh_tokens",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("client_id", String(255), nullable=True),
    Column("token_hash", String(64), nullable=False, unique=True),  # SHA-256 hex
    Column("scopes", ARRAY(Text), nullable=False, server_default="{}"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_refresh_tokens_user_id", refresh_tokens_table.c.user_id)
