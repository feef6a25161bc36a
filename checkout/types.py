from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

SETUP_FAILED_MESSAGE: Final[str] = "Element Setup failed"
HANDLES_NOT_READY_MESSAGE: Final[str] = "Instance or Element not ready"
CLIENT_INIT_FAILED_MESSAGE: Final[str] = "Payment client failed to load"
UNKNOWN_ERROR_MESSAGE: Final[str] = "Something went wrong"

APPEARANCE: Final[dict[str, Any]] = {"theme": "night"}
PAYMENT_ELEMENT_KIND: Final[str] = "payment"
PAYMENT_ELEMENT_OPTIONS: Final[dict[str, Any]] = {
    "business": {"name": ""},
    "fields": {"billingDetails": "auto"},
}
REDIRECT_IF_REQUIRED: Final[str] = "if_required"


class CheckoutStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    WAITING_FOR_USER = "waiting_for_user"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutError:
    message: str
    code: str | None = None
    type: str | None = None

    @classmethod
    def from_collaborator(cls, error: Any) -> "CheckoutError":
        """Normalize a provider error (mapping, exception or plain object) into a user-facing error."""
        if isinstance(error, CheckoutError):
            return error
        if isinstance(error, dict):
            return cls(
                message=str(error.get("message") or UNKNOWN_ERROR_MESSAGE),
                code=error.get("code"),
                type=error.get("type"),
            )
        message = getattr(error, "message", None) or str(error) or UNKNOWN_ERROR_MESSAGE
        return cls(
            message=str(message),
            code=getattr(error, "code", None),
            type=getattr(error, "type", None),
        )


@dataclass(frozen=True)
class ConfirmResult:
    intent_status: str | None = None
    error: CheckoutError | None = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "ConfirmResult":
        """Build from a confirm response shaped like ``{"paymentIntent": {...}, "error": {...}}``."""
        intent = response.get("paymentIntent") or {}
        error = response.get("error")
        return cls(
            intent_status=intent.get("status"),
            error=CheckoutError.from_collaborator(error) if error else None,
        )


@dataclass(frozen=True)
class CheckoutView:
    show_processing: bool
    show_success: bool
    show_form: bool
    error_message: str | None
