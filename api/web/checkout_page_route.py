from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates

from checkout.types import CheckoutView
from core.settings import Settings, get_settings
from security.checkout_session import CHECKOUT_TOKEN_HEADER, issue_checkout_token


class CheckoutPageContext(TypedDict):
    publishable_key: str
    checkout_token: str
    token_header: str
    amount_minor: int
    currency: str
    formatted_amount: str


BASE_DIR = Path(__file__).resolve().parents[2]
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter(prefix="/web", tags=["Web Checkout"])

INITIAL_VIEW = CheckoutView(show_processing=False, show_success=False, show_form=False, error_message=None)


def _format_minor_amount(amount_minor: int) -> str:
    return f"{amount_minor / 100:,.2f}"


def build_checkout_context(settings: Settings, checkout_token: str) -> CheckoutPageContext:
    return {
        "publishable_key": settings.stripe_publishable_key,
        "checkout_token": checkout_token,
        "token_header": CHECKOUT_TOKEN_HEADER,
        "amount_minor": settings.checkout_amount_minor,
        "currency": settings.checkout_currency.upper(),
        "formatted_amount": _format_minor_amount(settings.checkout_amount_minor),
    }


@router.get("/checkout", include_in_schema=False)
async def checkout_page(request: Request, settings: Settings = Depends(get_settings)):
    checkout = build_checkout_context(settings, issue_checkout_token(request))
    return templates.TemplateResponse(
        request,
        "checkout.html",
        {
            "checkout": checkout,
            "view": INITIAL_VIEW,
            "mount_target_id": "checkout-target",
            "request_id": getattr(request.state, "request_id", None),
        },
    )
