import json
import logging
from dataclasses import dataclass
from typing import Any

from gateway_hooks.core.config import Settings
from gateway_hooks.schemas.events import InboundEvent
from gateway_hooks.services.handlers import RecordError, get_handler

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\r\n"
UNKNOWN_EVENT_STATUS = 500


class MalformedPayloadError(Exception):
    pass


@dataclass(frozen=True)
class DispatchResult:
    body: str
    status_code: int = 200


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_body(raw: bytes) -> Any:
    """
    Parse a request body as JSON.

    Raise MalformedPayloadError with the parser's message if it is not
    UTF-8 encoded JSON.
    """
    try:
        text = raw.decode("utf-8")
        return json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedPayloadError(str(exc)) from exc


def dispatch(document: Any) -> DispatchResult:
    """Route a parsed webhook document to the handler for its event."""
    inbound = InboundEvent.from_document(document)
    handler = get_handler(inbound.event)
    if handler is None:
        logger.warning(f"Unknown event {inbound.event!r}")
        raw = json.dumps(inbound.document, separators=(",", ":"), ensure_ascii=False)
        return DispatchResult(
            f"Unknown event. Raw data: {raw}", status_code=UNKNOWN_EVENT_STATUS
        )

    lines = handler.handle(inbound.payload)
    logger.info(f"Dispatched {inbound.event} with {len(lines)} records")
    return DispatchResult(LINE_SEPARATOR.join(lines))


def invalid_method() -> DispatchResult:
    return DispatchResult("Invalid request type.")


def process(raw: bytes, settings: Settings) -> DispatchResult:
    try:
        document = parse_body(raw)
    except MalformedPayloadError as exc:
        logger.warning(f"Malformed webhook body: {exc}")
        return DispatchResult(
            f"Format Exception - unable to parse JSON: {exc}",
            status_code=settings.malformed_json_status,
        )

    try:
        return dispatch(document)
    except RecordError as exc:
        logger.warning(f"Rejected webhook: {exc}")
        return DispatchResult(str(exc), status_code=settings.record_error_status)
