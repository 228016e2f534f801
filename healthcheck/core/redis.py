from __future__ import annotations

import redis.asyncio as aioredis


def create_redis_client(url: str) -> aioredis.Redis:
    return aioredis.from_url(  # type: ignore[no-untyped-call]
        url,
        decode_responses=True,
    )
