from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Protocol, runtime_checkable

from fastapi import Request

from healthcheck.schemas import DetailEntry

DetailsMap = Mapping[str, Sequence[DetailEntry]]
Authorizer = Callable[[Request], bool]


@runtime_checkable
class DetailsProvider(Protocol):
    """Abstract health details provider interface.

    Implement this protocol to contribute entries to the ``details`` object of
    a health response (uptime readers, datastore pings, etc.)
    """

    def health_details(self) -> DetailsMap | Awaitable[DetailsMap]:
        """Return the current details, keyed by ``componentName[:measurementName]``."""
        ...

    def authorize_health(self, request: Request) -> bool:
        """Whether this provider's details may be included in the response to this request."""
        ...


class BaseDetailsProvider:
    """Shared plumbing for the bundled providers: a name and an optional authorizer."""

    name: str = "provider"

    def __init__(self, authorizer: Authorizer | None = None, name: str | None = None) -> None:
        self.authorizer = authorizer
        if name is not None:
            self.name = name

    def authorize_health(self, request: Request) -> bool:
        if self.authorizer is None:
            return True
        return self.authorizer(request)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
