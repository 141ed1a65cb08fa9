import logging
from dataclasses import dataclass
from typing import Any, Callable

from gateway_hooks.schemas.events import CardRecord, PendingRecord, PurchaseRecord
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class RecordError(Exception):
    """A payload record is missing a field its handler reads."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        if reason is None:
            message = f"Missing field - unable to read {path}"
        else:
            message = f"Invalid field - unable to read {path}: {reason}"
        super().__init__(message)

    @classmethod
    def from_validation(cls, index: int, exc: ValidationError) -> "RecordError":
        error = exc.errors()[0]
        path = f"payload[{index}]"
        for part in error["loc"]:
            path += f"[{part}]" if isinstance(part, int) else f".{part}"
        if error["type"] == "missing" or error.get("input", ...) is None:
            return cls(path)
        return cls(path, error["msg"])


@dataclass(frozen=True)
class EventHandler:
    event: str
    record_model: type[BaseModel]
    describe: Callable[[Any], str]

    def handle(self, payload: Any) -> list[str]:
        """Return one acknowledgment line per payload record, in order."""
        if payload is None:
            raise RecordError("payload")
        if not isinstance(payload, list):
            raise RecordError("payload", "Input should be a valid array")

        lines = []
        for index, item in enumerate(payload):
            try:
                record = self.record_model.model_validate(item)
            except ValidationError as exc:
                raise RecordError.from_validation(index, exc) from exc
            lines.append(self.describe(record))
        logger.debug(f"{self.event}: described {len(lines)} records")
        return lines


# Customer e-mails and purchase re-queuing hang off these events; the
# receiver only acknowledges them.
HANDLERS: dict[str, EventHandler] = {
    handler.event: handler
    for handler in (
        EventHandler(
            "charge:pending",
            PendingRecord,
            lambda r: f"Notified Customer {r.customer.id}",
        ),
        EventHandler(
            "charge:retry",
            PurchaseRecord,
            lambda r: f"Purchase for {r.subscription.id} queued for retry.",
        ),
        EventHandler(
            "charge:successful",
            PurchaseRecord,
            lambda r: f"Purchase for {r.subscription.id} successful, queued for next cycle.",
        ),
        EventHandler(
            "charge:failed",
            PurchaseRecord,
            lambda r: f"Purchase for {r.subscription.id} failed, abandoned.",
        ),
        EventHandler(
            "card:expiring",
            CardRecord,
            lambda r: f"Card for customer #{r.id} expiring within 30 days.",
        ),
        EventHandler(
            "card:expired",
            CardRecord,
            lambda r: f"Card for customer #{r.id} expired.",
        ),
    )
}


def get_handler(event: str) -> EventHandler | None:
    return HANDLERS.get(event)
