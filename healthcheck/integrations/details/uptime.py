from __future__ import annotations

import time
from datetime import UTC, datetime

import psutil

from healthcheck.integrations.details.base import Authorizer, BaseDetailsProvider
from healthcheck.schemas import SYSTEM, UPTIME, DetailEntry, Status, details_key


class _UptimeProvider(BaseDetailsProvider):
    component_type = SYSTEM

    def __init__(self, authorizer: Authorizer | None = None, name: str | None = None) -> None:
        super().__init__(authorizer=authorizer, name=name)
        self.key = details_key(self.name, UPTIME)

    def _started_at(self) -> float:
        raise NotImplementedError

    def health_details(self) -> dict[str, list[DetailEntry]]:
        now = time.time()
        entry = DetailEntry(
            componentType=self.component_type,
            observedValue=round(now - self._started_at(), 3),
            observedUnit="s",
            status=Status.PASS,
            time=datetime.fromtimestamp(now, tz=UTC),
        )
        return {self.key: [entry]}


class SystemUptimeProvider(_UptimeProvider):
    """Reports seconds since the host booted under ``system:uptime``."""

    name = "system"

    def _started_at(self) -> float:
        return psutil.boot_time()


class ProcessUptimeProvider(_UptimeProvider):
    """Reports seconds since this process started under ``process:uptime``."""

    name = "process"

    def __init__(self, authorizer: Authorizer | None = None, name: str | None = None) -> None:
        super().__init__(authorizer=authorizer, name=name)
        self._process = psutil.Process()

    def _started_at(self) -> float:
        return self._process.create_time()
