# aacshare/app/api/middleware.py
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from aacshare.app.api.errors import error_response
from aacshare.app.core.errors import UploadTooLarge


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_body_size`` bytes with 413.

    A declared Content-Length over the limit is refused before the body is
    read. Otherwise every ``http.request`` message is counted as it is
    received, so a chunked body stops being read as soon as it passes the
    limit instead of being spooled in full.
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_size:
            await self._reject(scope, receive, send)
            return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    # HTTPException passes through FastAPI's body parsing unchanged
                    raise StarletteHTTPException(status_code=413, detail=UploadTooLarge.message)
            return message

        async def tracked_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except StarletteHTTPException as exc:
            if exc.status_code != 413 or response_started:
                raise
            await self._reject(scope, receive, send)

    @staticmethod
    async def _reject(scope: Scope, receive: Receive, send: Send) -> None:
        response = error_response(413, UploadTooLarge.message)
        await response(scope, receive, send)
