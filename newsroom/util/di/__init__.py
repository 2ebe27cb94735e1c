"""Dependency injection wiring."""

from typing import Type

from newsroom.util.di.application import ProdApplicationProvider
from newsroom.util.di.base import Component, ProviderBase
from newsroom.util.di.core import ProdConfigProvider
from newsroom.util.di.domain import ProdDomainProvider
from newsroom.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

# Config, domain and application providers are concrete; persistence is swappable
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Components that have a mock implementation registered."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None and base.__subclasses__()
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Select the mock subclass of a swappable component

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
