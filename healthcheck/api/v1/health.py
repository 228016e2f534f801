from __future__ import annotations

from fastapi import FastAPI, Request, Response, status
from starlette.types import Receive, Scope, Send

from healthcheck.schemas import HEALTH_MEDIA_TYPE
from healthcheck.services.health import HealthService

ALLOWED_METHODS = "OPTIONS, GET, HEAD"
OPTIONS_CACHE_CONTROL = "max-age=604800"
READ_METHODS = frozenset({"GET", "HEAD"})


async def health_endpoint(request: Request) -> Response:
    """Service health per the Health Check Response Format for HTTP APIs.

    OPTIONS advertises the allowed methods, GET and HEAD return the health
    document with status 200, anything else gets 405. Every response carries
    the ``application/health+json`` media type.
    """
    if request.method == "OPTIONS":
        return Response(
            status_code=status.HTTP_200_OK,
            media_type=HEALTH_MEDIA_TYPE,
            headers={"Allow": ALLOWED_METHODS, "Cache-Control": OPTIONS_CACHE_CONTROL},
        )
    if request.method not in READ_METHODS:
        return Response(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            media_type=HEALTH_MEDIA_TYPE,
        )

    service: HealthService = request.app.state.health_service
    report = await service.build_report(request)
    return Response(
        content=report.model_dump_json(),
        status_code=status.HTTP_200_OK,
        media_type=HEALTH_MEDIA_TYPE,
    )


class HealthRoute:
    """ASGI wrapper around ``health_endpoint``.

    Starlette restricts plain function endpoints to GET/HEAD unless given a
    method list; an ASGI app is matched for every method, so OPTIONS and
    unsupported methods reach ``health_endpoint`` as well.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = await health_endpoint(Request(scope, receive))
        await response(scope, receive, send)


def register_health_route(app: FastAPI, path: str = "/health") -> None:
    """Mount the health endpoint on ``path`` for every HTTP method."""
    app.add_route(path, HealthRoute(), name="health", include_in_schema=False)
