from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PaymentIntentStatus(str, Enum):
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    PROCESSING = "processing"
    REQUIRES_CAPTURE = "requires_capture"
    CANCELED = "canceled"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class PaymentIntentRequest:
    amount_minor: int
    currency: str


@dataclass(frozen=True)
class PaymentIntentRecord:
    """Transient view of a collaborator-owned intent; ``raw`` is the record as returned."""

    id: str | None
    client_secret: str | None
    status: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "PaymentIntentRecord":
        return cls(
            id=raw.get("id"),
            client_secret=raw.get("client_secret"),
            status=raw.get("status"),
            raw=raw,
        )

    @property
    def is_succeeded(self) -> bool:
        return self.status == PaymentIntentStatus.SUCCEEDED.value
