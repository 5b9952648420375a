"""
Correlation id middleware.

Takes the caller's X-Correlation-ID when present, otherwise generates
one, binds it to the request context for logging and echoes it back.
"""

from fastapi import Request

from shared.logging import CORRELATION_ID_HEADER, set_correlation_id


async def add_correlation_id(request: Request, call_next):
    correlation_id = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
    response = await call_next(request)
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response
