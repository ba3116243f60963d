"""PostgreSQL implementations of Tenant and Application repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from zkey.domain.model import Application, Tenant
from zkey.domain.repository import ApplicationRepository, TenantRepository
from zkey.domain.value import TenantId
from zkey.persistence.mappers import (
    application_to_dict,
    row_to_application,
    row_to_tenant,
    tenant_to_dict,
)
from zkey.persistence.tables import applications_table, tenants_table


class PostgresTenantRepository(TenantRepository):
    """PostgreSQL implementation of TenantRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, tenant_id: TenantId) -> Optional[Tenant]:
        stmt = select(tenants_table).where(tenants_table.c.id == tenant_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_tenant(dict(row)) if row else None

    async def save(self, tenant: Tenant) -> Tenant:
        values = tenant_to_dict(tenant)
        stmt = insert(tenants_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[tenants_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return tenant


class PostgresApplicationRepository(ApplicationRepository):
    """PostgreSQL implementation of ApplicationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_client_id(self, client_id: str) -> Optional[Application]:
        stmt = select(applications_table).where(
            applications_table.c.client_id == client_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_application(dict(row)) if row else None

    async def save(self, application: Application) -> Application:
        values = application_to_dict(application)
        stmt = insert(applications_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[applications_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return application
