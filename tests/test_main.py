from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from healthcheck.core.config import Settings
from healthcheck.integrations.details.redis_ping import RedisDetailsProvider
from healthcheck.integrations.details.uptime import ProcessUptimeProvider, SystemUptimeProvider
from healthcheck.main import build_providers, build_template, create_app


def make_settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)  # type: ignore[arg-type]


def test_build_template_from_settings() -> None:
    template = build_template(
        make_settings(
            service_version="2",
            service_release_id="2.3.1",
            service_id="svc-1",
            service_description="orders",
            service_links={"about": "https://example.com/about"},
        )
    )

    assert template.model_dump(mode="json") == {
        "status": "pass",
        "version": "2",
        "releaseId": "2.3.1",
        "serviceId": "svc-1",
        "description": "orders",
        "links": {"about": "https://example.com/about"},
    }


def test_build_providers_order() -> None:
    providers = build_providers(make_settings(), redis=AsyncMock())

    assert [type(p) for p in providers] == [
        SystemUptimeProvider,
        ProcessUptimeProvider,
        RedisDetailsProvider,
    ]


def test_build_providers_without_uptime_or_redis() -> None:
    assert build_providers(make_settings(uptime_details_enabled=False)) == []


@pytest.mark.asyncio
async def test_app_serves_uptime_details() -> None:
    app = create_app(make_settings(health_path="/status", service_version="1"))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/status")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/health+json"
    data = response.json()
    assert data["status"] == "pass"
    assert data["version"] == "1"
    assert set(data["details"]) == {"system:uptime", "process:uptime"}


@pytest.mark.asyncio
async def test_app_hides_details_without_token() -> None:
    app = create_app(make_settings(health_details_token="s3cret"))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        anonymous = await ac.get("/health")
        wrong = await ac.get("/health", headers={"X-Health-Token": "nope"})
        trusted = await ac.get("/health", headers={"X-Health-Token": "s3cret"})

    assert anonymous.status_code == 200
    assert anonymous.json()["details"] == {}
    assert wrong.json()["details"] == {}
    assert set(trusted.json()["details"]) == {"system:uptime", "process:uptime"}


def test_production_requires_details_token() -> None:
    with pytest.raises(ValueError, match="health_details_token"):
        make_settings(app_env="production")


def test_health_path_must_be_absolute() -> None:
    with pytest.raises(ValueError, match="health_path"):
        make_settings(health_path="health")


def test_blank_metadata_settings_are_omitted() -> None:
    template = build_template(make_settings(service_version="", service_description=""))

    assert template.model_dump(mode="json") == {"status": "pass"}
