from __future__ import annotations

import pytest
from fastapi import FastAPI
from starlette.requests import Request

from core.errors import AppException, ErrorCode
from services.intent_service import IntentService, get_intent_service


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [1, 999, 250_000])
async def test_create_intent_forwards_amount_and_fixed_currency(fake_gateway, amount):
    service = IntentService(gateway=fake_gateway, currency="EUR")

    result = await service.create_intent(amount)

    assert len(fake_gateway.requests) == 1
    assert fake_gateway.requests[0].amount_minor == amount
    assert fake_gateway.requests[0].currency == "eur"
    assert result.secret
    assert result.raw["client_secret"] == result.secret
    assert result.intent_id == "pi_123"


@pytest.mark.asyncio
async def test_create_intent_does_not_validate_amount(fake_gateway):
    service = IntentService(gateway=fake_gateway, currency="eur")

    await service.create_intent(0)

    assert fake_gateway.requests[0].amount_minor == 0


@pytest.mark.asyncio
async def test_create_intent_propagates_gateway_failure():
    class _FailingGateway:
        provider_name = "failing"

        async def create_intent(self, payload):
            raise AppException(status_code=502, code=ErrorCode.PAYMENT_PROVIDER_ERROR, message="boom")

    service = IntentService(gateway=_FailingGateway(), currency="eur")

    with pytest.raises(AppException):
        await service.create_intent(999)


@pytest.mark.asyncio
async def test_retrieve_status_reads_from_gateway(fake_gateway):
    fake_gateway.statuses["pi_123"] = "succeeded"
    service = IntentService(gateway=fake_gateway, currency="eur")

    record = await service.retrieve_status("pi_123")

    assert record.status == "succeeded"
    assert fake_gateway.retrieved == ["pi_123"]


def _request_for(app: FastAPI) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "app": app})


def test_get_intent_service_requires_configured_service(fake_gateway):
    app = FastAPI()

    with pytest.raises(AppException) as exc_info:
        get_intent_service(_request_for(app))
    assert exc_info.value.status_code == 503

    service = IntentService(gateway=fake_gateway, currency="eur")
    app.state.intent_service = service
    assert get_intent_service(_request_for(app)) is service
