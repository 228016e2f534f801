from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from fastapi import Request

from healthcheck.integrations.details.base import DetailsProvider
from healthcheck.schemas import (
    COMPONENT,
    DetailEntry,
    HealthReport,
    Status,
    validate_details_key,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Builds one health document per request from a template and detail providers.

    The template holds the static service metadata (version, releaseId,
    serviceId, description, notes, links). It is copied at construction and
    never mutated afterwards; every request gets its own report with
    ``status`` reset to pass and ``details`` rebuilt from the providers, so
    concurrent requests cannot see each other's details.
    """

    def __init__(self, template: HealthReport, *providers: DetailsProvider) -> None:
        self._template = template.model_copy(deep=True)
        self._providers: tuple[DetailsProvider, ...] = tuple(providers)

    @property
    def template(self) -> HealthReport:
        """A copy of the template; changing it does not affect the service."""
        return self._template.model_copy(deep=True)

    @property
    def providers(self) -> tuple[DetailsProvider, ...]:
        return self._providers

    async def build_report(self, request: Request) -> HealthReport:
        """Query authorized providers in registration order and merge their details.

        Entries sharing a key are concatenated in provider order, and within a
        provider in the provider's own order. Nothing is deduplicated.
        """
        details: dict[str, list[DetailEntry]] = {}
        for provider in self._providers:
            if not await self._is_authorized(provider, request):
                continue
            for key, entries in (await self._collect(provider)).items():
                details.setdefault(key, []).extend(entries)

        report = self._template.model_copy(deep=True)
        report.status = Status.PASS
        report.details = details
        return report

    async def _is_authorized(self, provider: DetailsProvider, request: Request) -> bool:
        try:
            authorized = bool(await _call(provider.authorize_health, request))
        except Exception:
            logger.exception("Authorization check of %r failed, omitting its details", provider)
            return False
        if not authorized:
            logger.debug("Details of %r not authorized for this request", provider)
        return authorized

    async def _collect(self, provider: DetailsProvider) -> dict[str, list[DetailEntry]]:
        """Fetch one provider's contribution, isolating any failure as a fail entry."""
        try:
            result = await _call(provider.health_details)
            return _copy_contribution(result)
        except Exception as exc:
            logger.exception("Details provider %r failed", provider)
            return {_provider_key(provider): [_failure_entry(exc)]}


async def _call(func: Callable[..., Any], *args: Any) -> Any:
    """Await coroutine functions; run plain callables in a worker thread."""
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    result = await asyncio.to_thread(func, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _copy_contribution(
    contribution: Mapping[str, Sequence[DetailEntry]],
) -> dict[str, list[DetailEntry]]:
    copied: dict[str, list[DetailEntry]] = {}
    for key, entries in contribution.items():
        validate_details_key(key)
        copied[key] = [_as_entry(entry) for entry in entries]
    return copied


def _as_entry(entry: DetailEntry | Mapping[str, object]) -> DetailEntry:
    if isinstance(entry, DetailEntry):
        return entry.model_copy(deep=True)
    return DetailEntry.model_validate(entry)


def _provider_key(provider: DetailsProvider) -> str:
    name = getattr(provider, "name", None) or type(provider).__name__
    return str(name).replace(":", "_")


def _failure_entry(exc: Exception) -> DetailEntry:
    return DetailEntry(
        componentType=COMPONENT,
        status=Status.FAIL,
        time=datetime.now(UTC),
        output=str(exc) or type(exc).__name__,
    )


def create_health_service(
    template: HealthReport, providers: Iterable[DetailsProvider] = ()
) -> HealthService:
    service = HealthService(template, *providers)
    logger.info(
        "Health service ready with %d details provider(s): %s",
        len(service.providers),
        ", ".join(repr(provider) for provider in service.providers) or "none",
    )
    return service
