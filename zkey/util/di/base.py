"""Base classes for dependency injection providers.

Infrastructure that talks to the outside world (the database, the email and
SMS gateways) is declared as a *component*: an abstract provider whose
subclasses are the production implementation and, under ``tests/di``, a
mock. A container picks one implementation per component.
"""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["notifications", "persistence"]


class ProviderBase(Provider):
    """Base for all DI providers.

    Attributes:
        __mock_component__: Component name, None for providers that are never mocked
        __is_mock__: Whether this is a mock implementation
        __depends_on__: Components that must be real whenever this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()


def resolve_implementation(
    base: type[ProviderBase], use_mock: bool
) -> type[ProviderBase]:
    """Pick the production or mock subclass of a component.

    Providers without subclasses are concrete and returned unchanged.

    Raises:
        ValueError: If the component has no implementation of the requested kind
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    for candidate in subclasses:
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )
