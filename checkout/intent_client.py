from __future__ import annotations

from typing import Any

import httpx

from security.checkout_session import CHECKOUT_TOKEN_HEADER


class IntentServiceError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Intent service responded with HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"Intent service responded with HTTP {response.status_code}"


class IntentServiceClient:
    """Talks to the checkout API the way the browser page does.

    The underlying ``httpx.AsyncClient`` keeps the session cookie between
    ``start_session`` and ``request_intent``.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._checkout_token: str | None = None

    @classmethod
    def for_base_url(cls, base_url: str, *, timeout: float = 15.0) -> "IntentServiceClient":
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    @property
    def checkout_token(self) -> str | None:
        return self._checkout_token

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as err:
            raise IntentServiceError(f"Intent service unreachable: {err}") from err

        if response.is_error:
            raise IntentServiceError(
                _error_message(response),
                status_code=response.status_code,
                payload=response.text,
            )
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise IntentServiceError(
                "Intent service returned an invalid response",
                status_code=response.status_code,
                payload=response.text,
            )
        return body

    def _headers(self) -> dict[str, str]:
        if not self._checkout_token:
            return {}
        return {CHECKOUT_TOKEN_HEADER: self._checkout_token}

    async def start_session(self) -> dict[str, Any]:
        body = await self._send("GET", "/api/checkout-session")
        self._checkout_token = body.get("checkout_token")
        return body

    async def request_intent(self, amount: int) -> dict[str, Any]:
        if self._checkout_token is None:
            await self.start_session()
        body = await self._send(
            "POST",
            "/api/setup-stripe",
            json={"amount": amount},
            headers=self._headers(),
        )
        intent = body.get("paymentIntents")
        return intent if isinstance(intent, dict) else {}

    async def fetch_status(self, intent_id: str) -> str | None:
        body = await self._send("GET", f"/api/payment-intents/{intent_id}", headers=self._headers())
        return (body.get("data") or {}).get("status")
