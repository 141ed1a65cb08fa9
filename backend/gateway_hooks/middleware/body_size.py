import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)


class BodyTooLargeError(Exception):
    pass


def payload_too_large() -> Response:
    return PlainTextResponse("Payload too large", status_code=413)


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, raising BodyTooLargeError once more than
    ``max_bytes`` have arrived. Covers chunked bodies with no Content-Length.
    """
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise BodyTooLargeError(f"Body exceeds {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject POSTs whose declared body exceeds ``max_bytes``."""

    def __init__(self, app, max_bytes: int = 1_048_576):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next) -> Response:
        # Other methods are refused by the webhook route without reading a body.
        if request.method != "POST":
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_bytes:
                logger.warning(
                    f"Rejected {request.method} {request.url.path}: "
                    f"{content_length} bytes > {self.max_bytes}"
                )
                return payload_too_large()
        return await call_next(request)
