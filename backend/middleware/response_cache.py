"""Response cache middleware built on the in-memory TTL cache.

Only GET requests under the configured path prefix are cached. The cache key
is the raw path plus ``?query`` when a query string is present. It is an exact
string match: ``?a=1&b=2`` and ``?b=2&a=1`` are separate entries.
"""

import logging
from collections.abc import Callable

from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from services.cache import TTLCache

logger = logging.getLogger(__name__)


class ResponseCapture:
    """Wraps an ASGI ``send`` callable, forwarding every message while keeping
    a copy of the response status and body.

    The ``http.response.start`` message is held back until the first body
    bytes (or the final body message) arrive, so ``on_start`` can inspect the
    status and whether there is any body before headers go out.
    """

    def __init__(self, send: Send, on_start: Callable[[Message, bool], None] | None = None):
        self._send = send
        self._on_start = on_start
        self._pending_start: Message | None = None
        self._chunks: list[bytes] = []
        self.status_code: int | None = None

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status_code = message["status"]
            self._pending_start = message
            return

        if message["type"] == "http.response.body":
            chunk = message.get("body", b"")
            more_body = message.get("more_body", False)
            if self._pending_start is not None:
                if not chunk and more_body:
                    return
                start, self._pending_start = self._pending_start, None
                if self._on_start is not None:
                    self._on_start(start, bool(chunk))
                await self._send(start)
            if chunk:
                self._chunks.append(chunk)

        await self._send(message)


class ResponseCacheMiddleware:
    def __init__(self, app: ASGIApp, cache: TTLCache, ttl: float, path_prefix: str = "/api"):
        self.app = app
        self.cache = cache
        self.ttl = ttl
        self.path_prefix = path_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope["method"] != "GET"
            or not scope["path"].startswith(self.path_prefix)
        ):
            await self.app(scope, receive, send)
            return

        key = cache_key(scope)
        cached = self.cache.get(key)
        if cached is not None:
            response = Response(
                content=cached,
                status_code=200,
                media_type="application/json",
                headers={"X-Cache": "HIT"},
            )
            await response(scope, receive, send)
            return

        def mark_miss(start: Message, has_body: bool) -> None:
            if start["status"] == 200 and has_body:
                MutableHeaders(scope=start).append("X-Cache", "MISS")

        capture = ResponseCapture(send, on_start=mark_miss)
        await self.app(scope, receive, capture)

        body = capture.body
        if capture.status_code == 200 and body:
            self.cache.set(key, body, self.ttl)
            logger.debug("Cached %d bytes for %s", len(body), key)


def cache_key(scope: Scope) -> str:
    key = scope["path"]
    query = scope.get("query_string", b"")
    if query:
        key += "?" + query.decode("latin-1")
    return key
