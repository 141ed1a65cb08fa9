import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    # Numeric identities read as strings.
    model_config = ConfigDict(coerce_numbers_to_str=True)


class CustomerRef(Record):
    id: str


class SubscriptionRef(Record):
    id: str


class PendingRecord(Record):
    """A subscription queued for charging; the customer gets a heads-up."""

    id: str = Field(..., description="Subscription ID")
    customer: CustomerRef


class PurchaseRecord(Record):
    """A subscription plus the purchase the gateway attempted for it."""

    subscription: SubscriptionRef
    response: Any = Field(..., description="Purchase result, kept opaque")


class CardRecord(Record):
    id: str = Field(..., description="Customer ID")


class InboundEvent(BaseModel):
    event: str = ""
    payload: Any = None
    document: Any = None

    @classmethod
    def from_document(cls, document: Any) -> "InboundEvent":
        if not isinstance(document, dict):
            return cls(document=document)

        event = document.get("event")
        if event is None:
            name = ""
        elif isinstance(event, str):
            name = event
        else:
            name = json.dumps(event, separators=(",", ":"))
        return cls(event=name, payload=document.get("payload"), document=document)
