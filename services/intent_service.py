from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request

from core.errors import payment_provider_unavailable
from core.payments import IntentGateway, PaymentIntentRecord, PaymentIntentRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentResult:
    secret: str | None
    raw: dict[str, Any]

    @property
    def intent_id(self) -> str | None:
        return self.raw.get("id")


class IntentService:
    """Creates payment intents for a fixed currency.

    The amount is forwarded untouched; the collaborator is the one that
    rejects non-positive or malformed amounts.
    """

    def __init__(self, *, gateway: IntentGateway, currency: str) -> None:
        self._gateway = gateway
        self._currency = currency.lower()

    @property
    def currency(self) -> str:
        return self._currency

    async def create_intent(self, amount: int) -> IntentResult:
        record = await self._gateway.create_intent(
            PaymentIntentRequest(amount_minor=amount, currency=self._currency)
        )
        logger.info(
            "Created payment intent %s via %s (amount=%s %s)",
            record.id,
            self._gateway.provider_name,
            amount,
            self._currency,
        )
        return IntentResult(secret=record.client_secret, raw=record.raw)

    async def retrieve_status(self, intent_id: str) -> PaymentIntentRecord:
        return await self._gateway.retrieve_intent(intent_id)


def get_intent_service(request: Request) -> IntentService:
    service = getattr(request.app.state, "intent_service", None)
    if service is None:
        raise payment_provider_unavailable()
    return service
