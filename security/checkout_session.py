from __future__ import annotations

import secrets
from typing import Final

from fastapi import Header, Request

from core.errors import checkout_intent_forbidden, checkout_session_invalid
from security.principal import CheckoutPrincipal

CHECKOUT_TOKEN_HEADER: Final[str] = "X-Checkout-Token"
SESSION_TOKEN_KEY: Final[str] = "checkout_token"
SESSION_INTENTS_KEY: Final[str] = "checkout_intents"
# Signed cookies are size-limited; only the most recent intents stay bound.
MAX_BOUND_INTENTS: Final[int] = 20


def issue_checkout_token(request: Request) -> str:
    """Start a fresh checkout binding for this browser session."""
    token = secrets.token_urlsafe(32)
    request.session[SESSION_TOKEN_KEY] = token
    request.session[SESSION_INTENTS_KEY] = []
    return token


def _principal_from_session(request: Request) -> CheckoutPrincipal | None:
    token = request.session.get(SESSION_TOKEN_KEY)
    if not token:
        return None
    return CheckoutPrincipal(
        checkout_token=token,
        intent_ids=list(request.session.get(SESSION_INTENTS_KEY) or []),
    )


async def verify_checkout_session(
    request: Request,
    x_checkout_token: str | None = Header(default=None, alias=CHECKOUT_TOKEN_HEADER),
) -> CheckoutPrincipal:
    principal = _principal_from_session(request)
    if principal is None:
        raise checkout_session_invalid(details={"reason": "no checkout session"})
    if not x_checkout_token or not secrets.compare_digest(x_checkout_token, principal.checkout_token):
        raise checkout_session_invalid(details={"reason": "checkout token mismatch"})
    return principal


def bind_intent(request: Request, intent_id: str | None) -> None:
    if not intent_id:
        return
    bound = [value for value in request.session.get(SESSION_INTENTS_KEY) or [] if value != intent_id]
    bound.append(intent_id)
    request.session[SESSION_INTENTS_KEY] = bound[-MAX_BOUND_INTENTS:]


def ensure_intent_bound(principal: CheckoutPrincipal, intent_id: str) -> None:
    if not principal.owns_intent(intent_id):
        raise checkout_intent_forbidden(intent_id)
