from checkout.intent_client import IntentServiceClient, IntentServiceError
from checkout.rendering import render_checkout
from checkout.session import CheckoutSession
from checkout.types import CheckoutError, CheckoutStatus, CheckoutView, ConfirmResult

__all__ = [
    "CheckoutError",
    "CheckoutSession",
    "CheckoutStatus",
    "CheckoutView",
    "ConfirmResult",
    "IntentServiceClient",
    "IntentServiceError",
    "render_checkout",
]
