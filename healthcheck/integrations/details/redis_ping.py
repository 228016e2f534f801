from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime

from redis.asyncio import Redis

from healthcheck.integrations.details.base import Authorizer, BaseDetailsProvider
from healthcheck.schemas import DATASTORE, RESPONSE_TIME, DetailEntry, Status, details_key

logger = logging.getLogger(__name__)


class RedisDetailsProvider(BaseDetailsProvider):
    """Pings a Redis server and reports the round-trip under ``redis:responseTime``.

    The ping is bounded by ``timeout`` seconds. A failed or timed-out ping is
    reported as a ``fail`` entry rather than raised, since an unreachable
    datastore is a health observation, not a provider error.
    """

    name = "redis"

    def __init__(
        self,
        redis: Redis,
        timeout: float = 1.0,
        component_id: str | None = None,
        authorizer: Authorizer | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(authorizer=authorizer, name=name)
        self.redis = redis
        self.timeout = timeout
        self.component_id = component_id
        self.key = details_key(self.name, RESPONSE_TIME)

    async def health_details(self) -> dict[str, list[DetailEntry]]:
        observed_at = datetime.now(UTC)
        start = time.monotonic()
        try:
            await asyncio.wait_for(self.redis.ping(), timeout=self.timeout)
        except TimeoutError:
            logger.warning("Redis ping timed out after %.2fs", self.timeout)
            entry = self._entry(Status.FAIL, observed_at, output=f"ping timed out after {self.timeout}s")
        except Exception as exc:
            logger.warning("Redis ping failed: %s", exc)
            entry = self._entry(Status.FAIL, observed_at, output=str(exc))
        else:
            latency = (time.monotonic() - start) * 1000
            entry = self._entry(Status.PASS, observed_at, latency_ms=round(latency, 2))
        return {self.key: [entry]}

    def _entry(
        self,
        status: Status,
        observed_at: datetime,
        latency_ms: float | None = None,
        output: str | None = None,
    ) -> DetailEntry:
        return DetailEntry(
            componentId=self.component_id,
            componentType=DATASTORE,
            observedValue=latency_ms,
            observedUnit="ms" if latency_ms is not None else None,
            status=status,
            time=observed_at,
            output=output,
        )
