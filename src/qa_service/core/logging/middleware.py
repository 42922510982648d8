"""
Request-id middleware.

Every request gets an id: the incoming `X-Request-ID` header when present,
otherwise a fresh UUID4. The id is stored in the request-id contextvar for the
duration of the request (so every log line emitted while handling it carries
the same `request_id`) and echoed back in the response `X-Request-ID` header.
"""
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
