from __future__ import annotations

from core.payments.types import PaymentIntentRecord, PaymentIntentRequest
from core.settings import Settings


class FakeGateway:
    provider_name = "fake"

    def __init__(self, *, raw: dict | None = None, statuses: dict[str, str] | None = None) -> None:
        self.raw = raw if raw is not None else {
            "id": "pi_123",
            "object": "payment_intent",
            "amount": 999,
            "currency": "eur",
            "client_secret": "pi_123_secret_abc",
            "status": "requires_payment_method",
        }
        self.statuses = statuses or {}
        self.requests: list[PaymentIntentRequest] = []
        self.retrieved: list[str] = []

    async def create_intent(self, payload: PaymentIntentRequest) -> PaymentIntentRecord:
        self.requests.append(payload)
        return PaymentIntentRecord.from_raw(
            {**self.raw, "amount": payload.amount_minor, "currency": payload.currency}
        )

    async def retrieve_intent(self, intent_id: str) -> PaymentIntentRecord:
        self.retrieved.append(intent_id)
        return PaymentIntentRecord.from_raw(
            {"id": intent_id, "status": self.statuses.get(intent_id, "requires_payment_method")}
        )


def make_settings(**overrides) -> Settings:
    values = {
        "env": "test",
        "log_level": "INFO",
        "session_secret_key": "session-secret",
        "cors_origins": (),
        "debug_include_error_details": False,
        "stripe_secret_key": "sk_test_123",
        "stripe_publishable_key": "pk_test_123",
        "stripe_api_version": "2022-11-15",
        "checkout_currency": "eur",
        "checkout_amount_minor": 999,
        "checkout_rate_limit": "30/minute",
        "rate_limit_storage_uri": "memory://",
    }
    values.update(overrides)
    return Settings(**values)


