"""In-memory tenant and application repositories for testing."""

from typing import Optional

from zkey.domain.model import Application, Tenant
from zkey.domain.repository import ApplicationRepository, TenantRepository
from zkey.domain.value import ApplicationId, TenantId


class InMemoryTenantRepository(TenantRepository):
    """In-memory implementation of TenantRepository for testing."""

    def __init__(self) -> None:
        self._tenants: dict[TenantId, Tenant] = {}

    async def find_by_id(self, tenant_id: TenantId) -> Optional[Tenant]:
        return self._tenants.get(tenant_id)

    async def save(self, tenant: Tenant) -> Tenant:
        self._tenants[tenant.id] = tenant
        return tenant


class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory implementation of ApplicationRepository for testing."""

    def __init__(self) -> None:
        self._applications: dict[ApplicationId, Application] = {}

    async def find_by_client_id(self, client_id: str) -> Optional[Application]:
        for application in self._applications.values():
            if application.client_id == client_id:
                return application
        return None

    async def save(self, application: Application) -> Application:
        self._applications[application.id] = application
        return application
