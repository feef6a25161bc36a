from fastapi import HTTPException

from core.errors import checkout_session_invalid
from core.response_envelope import error_payload, http_exception_response, success_payload


def test_success_payload_includes_request_id():
    payload = success_payload(data={"value": 1}, message="ok", request_id="req-123")
    assert payload["success"] is True
    assert payload["data"] == {"value": 1}
    assert payload["requestId"] == "req-123"


def test_error_payload_omits_missing_request_id():
    payload = error_payload(message="failed", data={"code": "X"})
    assert payload["success"] is False
    assert payload["data"]["code"] == "X"
    assert "requestId" not in payload


def test_http_exception_response_unpacks_app_exception_detail():
    response = http_exception_response(checkout_session_invalid(details={"reason": "no checkout session"}))

    assert response.status_code == 401
    assert b'"code":"CHECKOUT_SESSION_INVALID"' in response.body
    assert b'"message":"Invalid checkout session"' in response.body


def test_http_exception_response_handles_plain_string_detail():
    response = http_exception_response(HTTPException(status_code=404, detail="Not Found"))

    assert response.status_code == 404
    assert b'"message":"Not Found"' in response.body
    assert b'"code":"HTTP_EXCEPTION"' in response.body
