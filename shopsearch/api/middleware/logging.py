"""
Request Logging Middleware
Tags every request with an id and logs how it went.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _request_fields(request: Request, request_id: str) -> Dict[str, Any]:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id and logs each request at start and finish.

    The id comes from the incoming X-Request-ID header or is generated. It is
    stored on request.state for routers and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        fields = _request_fields(request, request_id)

        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                **fields,
                "query": request.url.query or None,
                "client": request.client.host if request.client else None,
            },
        )

        started = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} raised {type(e).__name__}",
                exc_info=True,
                extra={**fields, "duration_ms": (time.time() - started) * 1000},
            )
            raise

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                **fields,
                "status_code": response.status_code,
                "duration_ms": (time.time() - started) * 1000,
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
