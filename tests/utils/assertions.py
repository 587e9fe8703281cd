from typing import Any, Optional

from httpx import Response

ENVELOPE_KEYS = ("statusCode", "message", "timestamp", "method", "path")


def assert_envelope(response: Response, expected_status: int = 200) -> Any:
    """Check the response envelope and return its ``data``."""
    body = response.json()
    if response.status_code != expected_status:
        raise AssertionError(
            f"Expected {expected_status}, got {response.status_code}: {body}"
        )
    missing = [key for key in ENVELOPE_KEYS if key not in body]
    if missing:
        raise AssertionError(f"Envelope is missing {missing}: {body}")
    if body["statusCode"] != expected_status:
        raise AssertionError(
            f"statusCode {body['statusCode']} != {expected_status}"
        )
    return body.get("data")


def assert_error(
    response: Response, expected_status: int, message: Optional[str] = None
) -> None:
    assert_envelope(response, expected_status)
    body = response.json()
    if "data" in body:
        raise AssertionError("Error response should not carry data")
    if message is not None and message not in body["message"]:
        raise AssertionError(
            f"Expected message {message!r}, got {body['message']!r}"
        )
