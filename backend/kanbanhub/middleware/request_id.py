"""Request correlation ids."""

import re
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Caller ids are copied into logs and response headers
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Reuse a well-formed caller id, otherwise mint a new one."""
    if header_value and _ACCEPTED_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation id, echoed in ``X-Request-ID``.

    ``LoggingMiddleware`` picks the id up from ``request.state``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
