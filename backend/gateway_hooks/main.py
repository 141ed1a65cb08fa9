import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from gateway_hooks.core.config import get_settings
from gateway_hooks.core.logging_config import setup_logging
from gateway_hooks.middleware.body_size import (
    BodySizeLimitMiddleware,
    BodyTooLargeError,
    payload_too_large,
    read_limited_body,
)
from gateway_hooks.services import dispatch

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title="Gateway Webhook Receiver",
    description="Acknowledges recurring-billing events from the payment gateway",
    version="1.0.0",
)
app.state.settings = settings

app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)

logger = logging.getLogger(__name__)


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok"}


async def receive_webhook(request: Request) -> Response:
    settings = request.app.state.settings
    logger.info(f"Received {request.method} {request.url.path}")
    if request.method == "HEAD":
        return PlainTextResponse("")
    if request.method != "POST":
        result = dispatch.invalid_method()
    else:
        try:
            raw = await read_limited_body(request, settings.max_body_bytes)
        except BodyTooLargeError as exc:
            logger.warning(f"Rejected {request.url.path}: {exc}")
            return payload_too_large()
        result = dispatch.process(raw, settings)
    return PlainTextResponse(result.body, status_code=result.status_code)


# Registered without a method list so every verb, standard or not, reaches
# the gate above instead of a 405.
app.add_route(settings.webhook_path, receive_webhook, include_in_schema=False)
