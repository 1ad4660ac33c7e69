import time
import uuid

from agrosim.core.logger import logger


def generate_request_id() -> str:
    return str(uuid.uuid4())


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs incoming requests and responses,
    sets X-Request-ID header, and records duration.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = generate_request_id()
        scope["request_id"] = request_id

        method = scope.get("method", "")
        path = scope.get("path", "")

        start = time.perf_counter()
        logger.info(
            "Incoming request",
            extra={"request_id": request_id, "method": method, "path": path},
        )

        status_holder = {"status": None}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_holder["status"] = message.get("status", 0)
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode("utf-8")))
                message["headers"] = headers

            await send(message)

        await self.app(scope, receive, send_wrapper)

        duration = time.perf_counter() - start
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": status_holder["status"],
                "duration_ms": round(duration * 1000, 2),
            },
        )


class ExceptionLoggingMiddleware:
    """
    Logs unhandled exceptions with their stack trace, then re-raises
    so Starlette can still produce the response.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        try:
            await self.app(scope, receive, send)
        except Exception:
            logger.exception(
                "Unhandled exception in request",
                extra={
                    "request_id": scope.get("request_id"),
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                },
            )
            raise
