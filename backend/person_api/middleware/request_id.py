"""
Person API: Request Correlation
==================================

What:  Ties every log line and problem response of one request to an id.
How:   RequestIDMiddleware takes the caller's X-Request-ID (or makes a short
       one), keeps it in a ContextVar and echoes it on the response.
       RequestIDLogFilter copies it onto each log record, so the store's
       "Person 5 appended" line and the handler's error line of the same
       POST carry the same id.

    2026-10-18T10:01:02 [INFO] person_api.services.person_store [3f9a1c2e]: Person 5 appended to data/persons.csv
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Shown in log lines written outside any request (startup, shutdown)
NO_REQUEST = "-"


def current_request_id() -> str:
    return request_id_var.get() or NO_REQUEST


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


class RequestIDMiddleware:
    """
    Plain ASGI middleware, so the handler runs in the same context and the
    exception handlers in main.py still see the id.

    The id is not reset when the response is done: each request runs in its
    own task with its own copy of the context.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = Headers(scope=scope).get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = rid
            await send(message)

        await self.app(scope, receive, send_with_request_id)
