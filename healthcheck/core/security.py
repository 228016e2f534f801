from __future__ import annotations

import hmac

from fastapi import Request

HEALTH_TOKEN_HEADER = "X-Health-Token"


class HeaderTokenAuthorizer:
    """Authorize health details via a shared secret header.

    With an empty secret every request is authorized (development setup).
    """

    def __init__(self, secret: str, header: str = HEALTH_TOKEN_HEADER) -> None:
        self.secret = secret
        self.header = header

    def __call__(self, request: Request) -> bool:
        if not self.secret:
            return True
        provided = request.headers.get(self.header)
        if provided is None:
            return False
        return hmac.compare_digest(provided.encode(), self.secret.encode())
