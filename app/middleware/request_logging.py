"""Access log middleware.

One structured line per request with method, path, status, duration, client
address and the bearer token subject. An X-Request-ID is taken from the
request or minted, and echoed on the response. Bodies are never logged.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.services.auth_service import extract_bearer_token

logger = logging.getLogger("app.request")


def _token_subject(request: Request) -> Optional[str]:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        return None
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        # Rejected later by the auth dependency if the route needs it
        return None
    return claims.get("sub")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        started = time.monotonic()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        context: Dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
            "request_id": request_id,
            "user_sub": _token_subject(request),
        }

        def elapsed_ms() -> int:
            return int((time.monotonic() - started) * 1000)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled exception during request",
                extra={**context, "duration_ms": elapsed_ms()},
            )
            raise

        logger.info(
            "Request finished",
            extra={**context, "status": response.status_code, "duration_ms": elapsed_ms()},
        )
        response.headers.setdefault("X-Request-ID", request_id)
        return response
