"""HTTP middleware: body size cap and security headers."""
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers


class RequestBodyTooLarge(HTTPException):
    def __init__(self):
        super().__init__(status_code=413, detail="Request body too large")


class BodySizeLimitMiddleware:
    """Cap request bodies at max_body_bytes.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are counted as they stream in, and reading past the
    cap raises RequestBodyTooLarge, which the error handlers render as 413.
    """

    def __init__(self, app, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                too_large = int(declared) > self.max_body_bytes
            except ValueError:
                response = JSONResponse({"error": "Invalid Content-Length"}, status_code=400)
                await response(scope, receive, send)
                return
            if too_large:
                await self._reject(scope, receive, send)
                return

        received = 0
        response_started = False

        async def counting_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise RequestBodyTooLarge()
            return message

        async def tracking_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, counting_receive, tracking_send)
        except RequestBodyTooLarge:
            # body read outside a route (e.g. by a middleware); nothing sent yet
            if response_started:
                raise
            await self._reject(scope, receive, send)

    @staticmethod
    async def _reject(scope, receive, send):
        response = JSONResponse({"error": "Request body too large"}, status_code=413)
        await response(scope, receive, send)


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    if not request.app.state.settings.security_headers_enabled:
        return response
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"
    response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
    return response
