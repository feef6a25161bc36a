from core.payments.provider import IntentGateway
from core.payments.stripe_provider import StripeIntentGateway
from core.payments.types import PaymentIntentRecord, PaymentIntentRequest, PaymentIntentStatus

__all__ = [
    "IntentGateway",
    "PaymentIntentRecord",
    "PaymentIntentRequest",
    "PaymentIntentStatus",
    "StripeIntentGateway",
]
