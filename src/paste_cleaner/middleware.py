# -*- coding: utf-8 -*-
"""
Per-request correlation id for the paste cleaning API.

Every clean, classify or paste call gets an id, taken from the caller's
header when present, so the JSON log lines of one paste can be grouped.
"""
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .config import settings

# Read by the logging filter; unset outside a request
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Correlation id of the paste being handled, if any."""
    return request_id_ctx.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each API call with a correlation id and echo it in the response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        paste_id = request.headers.get(settings.REQUEST_ID_HEADER) or uuid.uuid4().hex

        token = request_id_ctx.set(paste_id)
        try:
            response = await call_next(request)
            response.headers[settings.REQUEST_ID_HEADER] = paste_id
            return response
        finally:
            request_id_ctx.reset(token)
