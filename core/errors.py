from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    CHECKOUT_SESSION_INVALID = "CHECKOUT_SESSION_INVALID"
    CHECKOUT_INTENT_FORBIDDEN = "CHECKOUT_INTENT_FORBIDDEN"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PAYMENT_PROVIDER_ERROR = "PAYMENT_PROVIDER_ERROR"
    PAYMENT_PROVIDER_UNAVAILABLE = "PAYMENT_PROVIDER_UNAVAILABLE"


class AppException(HTTPException):
    def __init__(
        self,
        *,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        detail = {
            "message": message,
            "code": code.value,
            "details": details,
        }
        super().__init__(status_code=status_code, detail=detail, headers=headers)


def checkout_session_invalid(details: Any | None = None) -> AppException:
    return AppException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        code=ErrorCode.CHECKOUT_SESSION_INVALID,
        message="Invalid checkout session",
        details=details,
    )


def checkout_intent_forbidden(intent_id: str) -> AppException:
    return AppException(
        status_code=status.HTTP_403_FORBIDDEN,
        code=ErrorCode.CHECKOUT_INTENT_FORBIDDEN,
        message="Payment intent does not belong to this checkout session",
        details={"intent_id": intent_id},
    )


def payment_provider_error(message: str, details: Any | None = None) -> AppException:
    return AppException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        code=ErrorCode.PAYMENT_PROVIDER_ERROR,
        message=message,
        details=details,
    )


def payment_provider_unavailable(details: Any | None = None) -> AppException:
    return AppException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        code=ErrorCode.PAYMENT_PROVIDER_UNAVAILABLE,
        message="Payment provider is not configured",
        details=details,
    )
