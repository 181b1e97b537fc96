"""Request ID middleware.

Echoes the caller's X-Request-Id header, or assigns a fresh one when absent,
so log lines and responses can be correlated. The id is also placed on
`request.state.request_id`.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"

Headers = List[Tuple[bytes, bytes]]


def _find_header(headers: Headers, key: bytes) -> Optional[str]:
    for name, value in headers:
        if name.lower() == key and value:
            return value.decode("latin-1")
    return None


def _with_header(headers: Headers, key: bytes, value: str) -> Headers:
    kept = [(name, v) for name, v in headers if name.lower() != key]
    kept.append((key, value.encode("latin-1")))
    return kept


class RequestIdMiddleware:
    """Pure ASGI middleware; streaming responses pass through untouched."""

    def __init__(self, app: Any, header_name: str = REQUEST_ID_HEADER) -> None:
        self.app = app
        self._key = header_name.lower().encode("latin-1")

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        request_id = _find_header(list(scope.get("headers") or []), self._key) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message):  # type: ignore[no-untyped-def]
            if message.get("type") == "http.response.start":
                headers = _with_header(list(message.get("headers") or []), self._key, request_id)
                message = dict(message, headers=headers)
                logger.debug("request_completed request_id=%s status=%s", request_id, message.get("status"))
            await send(message)

        await self.app(scope, receive, send_with_id)


__all__ = ["RequestIdMiddleware", "REQUEST_ID_HEADER"]
