"""
Logging filters.

- RequestIdFilter: guarantees every LogRecord has a `request_id` attribute, read
  from a contextvar set by RequestIDMiddleware. A contextvar (not threading.local)
  is used because concurrent requests share the event loop thread.
- RedactFilter: masks values of sensitive `extra` keys before any handler sees them.

Both filters always return True; they annotate records, they never drop them.
"""
import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference:
      - a value passed explicitly via `extra={"request_id": ...}`
      - the contextvar value (set per request by the middleware)
      - the sentinel "-" so `%(request_id)s` never raises KeyError
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "dsn"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
