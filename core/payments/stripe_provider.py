from __future__ import annotations

import json
import logging
from typing import Any

import stripe

from core.errors import payment_provider_error
from core.payments.provider import IntentGateway
from core.payments.types import PaymentIntentRecord, PaymentIntentRequest
from core.settings import Settings

logger = logging.getLogger(__name__)


def _plain(stripe_object: Any) -> dict[str, Any]:
    to_dict = getattr(stripe_object, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return json.loads(json.dumps(stripe_object, default=str))


class StripeIntentGateway(IntentGateway):
    provider_name = "stripe"

    def __init__(self, *, client: Any) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeIntentGateway":
        client = stripe.StripeClient(
            settings.stripe_secret_key,
            stripe_version=settings.stripe_api_version,
            http_client=stripe.HTTPXClient(),
            max_network_retries=0,
        )
        return cls(client=client)

    async def create_intent(self, payload: PaymentIntentRequest) -> PaymentIntentRecord:
        params = {
            "amount": payload.amount_minor,
            "currency": payload.currency.lower(),
            "automatic_payment_methods": {"enabled": True},
        }
        try:
            intent = await self._client.payment_intents.create_async(params=params)
        except stripe.StripeError as err:
            logger.warning("Stripe intent creation failed: %s", err)
            raise payment_provider_error("Stripe intent creation failed", details=str(err)) from err

        return PaymentIntentRecord.from_raw(_plain(intent))

    async def retrieve_intent(self, intent_id: str) -> PaymentIntentRecord:
        try:
            intent = await self._client.payment_intents.retrieve_async(intent_id)
        except stripe.StripeError as err:
            logger.warning("Stripe intent retrieval failed for %s: %s", intent_id, err)
            raise payment_provider_error(
                "Stripe intent retrieval failed",
                details={"intent_id": intent_id, "error": str(err)},
            ) from err

        return PaymentIntentRecord.from_raw(_plain(intent))
