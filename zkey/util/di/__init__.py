"""Dependency injection module."""

from collections.abc import Collection

from zkey.util.di.application import ProdApplicationProvider
from zkey.util.di.base import Component, ProviderBase, resolve_implementation
from zkey.util.di.core import ProdConfigProvider
from zkey.util.di.domain import ProdDomainProvider
from zkey.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

# Configuration, domain and use cases are always real; the rest are components
PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    NotificationProvider,
    PersistenceProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__ for base in PROVIDERS if base.__mock_component__
)


def build_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry of ``PROVIDERS``.

    Args:
        mocked: Components to serve from their mock implementation

    Returns:
        Provider instances ready for ``make_async_container``
    """
    return [
        resolve_implementation(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "COMPONENTS",
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "build_providers",
    "resolve_implementation",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
