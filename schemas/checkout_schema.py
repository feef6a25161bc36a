from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class SetupStripeIn(BaseModel):
    # Smallest currency unit; range checks are left to the payment provider.
    amount: int


class SetupStripeOut(BaseModel):
    paymentIntents: dict[str, Any]


class CheckoutSessionOut(BaseModel):
    checkout_token: str
    publishable_key: str
    amount: int
    currency: str


class IntentStatusOut(BaseModel):
    id: str
    status: str | None
