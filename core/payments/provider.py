from __future__ import annotations

from typing import Protocol

from core.payments.types import PaymentIntentRecord, PaymentIntentRequest


class IntentGateway(Protocol):
    provider_name: str

    async def create_intent(self, payload: PaymentIntentRequest) -> PaymentIntentRecord:
        ...

    async def retrieve_intent(self, intent_id: str) -> PaymentIntentRecord:
        ...
