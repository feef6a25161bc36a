from __future__ import annotations

import pytest
import stripe

from core.errors import AppException, ErrorCode
from core.payments.stripe_provider import StripeIntentGateway
from core.payments.types import PaymentIntentRequest


class _PaymentIntents:
    def __init__(self, *, result: dict | None = None, error: Exception | None = None) -> None:
        self._result = result or {}
        self._error = error
        self.created: list[dict] = []
        self.retrieved: list[str] = []

    async def create_async(self, params: dict):
        self.created.append(params)
        if self._error is not None:
            raise self._error
        return {**self._result, "amount": params["amount"], "currency": params["currency"]}

    async def retrieve_async(self, intent_id: str):
        self.retrieved.append(intent_id)
        if self._error is not None:
            raise self._error
        return {"id": intent_id, "status": "succeeded"}


class _StripeClient:
    def __init__(self, payment_intents: _PaymentIntents) -> None:
        self.payment_intents = payment_intents


@pytest.mark.asyncio
async def test_create_intent_sends_amount_currency_and_automatic_methods():
    intents = _PaymentIntents(result={"id": "pi_1", "client_secret": "pi_1_secret_x", "status": "requires_payment_method"})
    gateway = StripeIntentGateway(client=_StripeClient(intents))

    record = await gateway.create_intent(PaymentIntentRequest(amount_minor=999, currency="EUR"))

    assert intents.created == [
        {"amount": 999, "currency": "eur", "automatic_payment_methods": {"enabled": True}}
    ]
    assert record.id == "pi_1"
    assert record.client_secret == "pi_1_secret_x"
    assert record.raw["amount"] == 999


@pytest.mark.asyncio
async def test_create_intent_wraps_stripe_errors():
    intents = _PaymentIntents(error=stripe.InvalidRequestError("Invalid positive integer", "amount"))
    gateway = StripeIntentGateway(client=_StripeClient(intents))

    with pytest.raises(AppException) as exc_info:
        await gateway.create_intent(PaymentIntentRequest(amount_minor=-1, currency="eur"))

    assert exc_info.value.status_code == 502
    assert exc_info.value.detail["code"] == ErrorCode.PAYMENT_PROVIDER_ERROR.value  # type: ignore
    assert "Invalid positive integer" in exc_info.value.detail["details"]  # type: ignore
    assert len(intents.created) == 1


@pytest.mark.asyncio
async def test_retrieve_intent_maps_record():
    intents = _PaymentIntents()
    gateway = StripeIntentGateway(client=_StripeClient(intents))

    record = await gateway.retrieve_intent("pi_9")

    assert intents.retrieved == ["pi_9"]
    assert record.is_succeeded


def test_from_settings_builds_explicit_client(settings):
    gateway = StripeIntentGateway.from_settings(settings)

    assert isinstance(gateway._client, stripe.StripeClient)
    assert stripe.api_key is None
