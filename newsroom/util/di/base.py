"""Provider base class shared by every layer."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a swappable test implementation
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Dishka provider tagged for production/mock selection.

    A base class that sets ``__mock_component__`` has one production and
    one mock subclass, told apart by ``__is_mock__``. Providers without
    subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
