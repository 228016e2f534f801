from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from redis.asyncio import Redis

from healthcheck.api.v1.health import register_health_route
from healthcheck.core.config import Settings, settings
from healthcheck.core.redis import create_redis_client
from healthcheck.core.security import HeaderTokenAuthorizer
from healthcheck.integrations.details.base import DetailsProvider
from healthcheck.integrations.details.redis_ping import RedisDetailsProvider
from healthcheck.integrations.details.uptime import ProcessUptimeProvider, SystemUptimeProvider
from healthcheck.schemas import HealthReport, Status
from healthcheck.services.health import create_health_service

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_template(config: Settings) -> HealthReport:
    """Static part of every health document, taken from settings."""
    return HealthReport(
        status=Status.PASS,
        version=config.service_version,
        releaseId=config.service_release_id,
        serviceId=config.service_id,
        description=config.service_description,
        notes=config.service_notes or None,
        links=config.service_links or None,
    )


def build_providers(config: Settings, redis: Redis | None = None) -> list[DetailsProvider]:
    """Details providers in registration order, gated by the details token."""
    authorizer = HeaderTokenAuthorizer(config.health_details_token)
    providers: list[DetailsProvider] = []
    if config.uptime_details_enabled:
        providers.append(SystemUptimeProvider(authorizer=authorizer))
        providers.append(ProcessUptimeProvider(authorizer=authorizer))
    if redis is not None:
        providers.append(
            RedisDetailsProvider(redis, timeout=config.redis_ping_timeout, authorizer=authorizer)
        )
    return providers


def create_app(config: Settings | None = None) -> FastAPI:
    config = config or settings
    configure_logging(config.app_log_level)

    redis = create_redis_client(config.redis_url) if config.redis_url else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        # Shutdown
        if redis is not None:
            await redis.aclose()

    app = FastAPI(
        title=config.app_name,
        version=config.service_version or "0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.health_service = create_health_service(
        build_template(config), build_providers(config, redis)
    )
    register_health_route(app, config.health_path)
    logger.info("Health endpoint registered at %s", config.health_path)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
