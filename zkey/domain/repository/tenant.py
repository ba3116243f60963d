"""Tenant and application repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from zkey.domain.model import Application, Tenant
from zkey.domain.value import TenantId


class TenantRepository(ABC):
    """Repository for Tenant entities."""

    @abstractmethod
    async def find_by_id(self, tenant_id: TenantId) -> Optional[Tenant]:
        """Find a tenant by ID.

        Args:
            tenant_id: The tenant's unique identifier

        Returns:
            The tenant if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, tenant: Tenant) -> Tenant:
        """Save a tenant (create or update)."""
        pass


class ApplicationRepository(ABC):
    """Repository for Application (OAuth client) entities."""

    @abstractmethod
    async def find_by_client_id(self, client_id: str) -> Optional[Application]:
        """Find an application by its globally unique client ID.

        Args:
            client_id: OAuth client identifier

        Returns:
            The application if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """Save an application (create or update)."""
        pass
