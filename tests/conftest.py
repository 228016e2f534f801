from __future__ import annotations

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from healthcheck.schemas import DetailEntry, HealthReport, Status
from healthcheck.services.health import HealthService
from tests.fakes import StaticProvider, make_app


@pytest.fixture
def template() -> HealthReport:
    return HealthReport(
        status=Status.WARN,
        version="1",
        releaseId="1.0.0-SNAPSHOT",
        serviceId="f03e522f-1f44-4062-9b55-9587f91a9c41",
        description="health of the billing service",
    )


@pytest.fixture
def client_for() -> Callable[[HealthService], AsyncClient]:
    def _client(service: HealthService) -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=make_app(service)), base_url="http://test")

    return _client


@pytest.fixture
async def client(template: HealthReport) -> AsyncGenerator[AsyncClient, None]:
    provider = StaticProvider({"db": [DetailEntry(componentId="db-1", status=Status.PASS)]})
    transport = ASGITransport(app=make_app(HealthService(template, provider)))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
