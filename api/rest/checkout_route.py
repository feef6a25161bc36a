from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from core.response_envelope import document_response
from core.settings import Settings, get_settings
from schemas.checkout_schema import CheckoutSessionOut, IntentStatusOut, SetupStripeIn, SetupStripeOut
from security.checkout_session import (
    bind_intent,
    ensure_intent_bound,
    issue_checkout_token,
    verify_checkout_session,
)
from security.principal import CheckoutPrincipal
from services.intent_service import IntentService, get_intent_service

router = APIRouter(tags=["Checkout"])


@router.get("/checkout-session", response_model=CheckoutSessionOut)
async def start_checkout_session(request: Request, settings: Settings = Depends(get_settings)):
    """Issue a checkout token bound to the caller's session cookie."""
    return CheckoutSessionOut(
        checkout_token=issue_checkout_token(request),
        publishable_key=settings.stripe_publishable_key,
        amount=settings.checkout_amount_minor,
        currency=settings.checkout_currency,
    )


async def read_setup_payload(request: Request) -> SetupStripeIn:
    """Parse the body as JSON whatever its content type; plain ``fetch`` string bodies arrive as text/plain."""
    try:
        return SetupStripeIn.model_validate_json(await request.body())
    except ValidationError as err:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in err.errors(include_url=False, include_context=False)]
        ) from err


@router.post(
    "/setup-stripe",
    response_model=SetupStripeOut,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SetupStripeIn.model_json_schema()}},
        }
    },
)
async def setup_stripe(
    request: Request,
    principal: CheckoutPrincipal = Depends(verify_checkout_session),
    service: IntentService = Depends(get_intent_service),
):
    """
    Create a payment intent for `amount` (smallest currency unit).

    Requires the `X-Checkout-Token` header issued by `/api/checkout-session`
    or the checkout page. The provider's intent record, including its
    `client_secret`, is returned verbatim under `paymentIntents`.
    """
    payload = await read_setup_payload(request)
    result = await service.create_intent(payload.amount)
    bind_intent(request, result.intent_id)
    return SetupStripeOut(paymentIntents=result.raw)


@router.get("/payment-intents/{intent_id}")
@document_response(
    message="Payment intent status fetched",
    success_example={"id": "pi_123", "status": "succeeded"},
    response_codes={401: "Invalid checkout session", 403: "Intent not bound to this session"},
)
async def fetch_intent_status(
    intent_id: str,
    principal: CheckoutPrincipal = Depends(verify_checkout_session),
    service: IntentService = Depends(get_intent_service),
):
    ensure_intent_bound(principal, intent_id)
    record = await service.retrieve_status(intent_id)
    return IntentStatusOut(id=record.id or intent_id, status=record.status)
