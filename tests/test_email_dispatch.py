import json

import httpx
import pytest

from app.services.credentials import Credential, UserType
from app.services.email_dispatch import EmailDispatcher, EmailDispatchError

URL = "https://functions.test/send-credentials-email"

CREDS = Credential(
    email="max@club.com",
    username="max@club.com",
    password="Secret123!",
    recipient_name="Max",
    user_type=UserType.STAFF,
    club_name="Riverside FC",
)


def _dispatcher(handler):
    return EmailDispatcher(URL, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_posts_payload_with_bearer_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "Credentials email sent successfully"})

    result = _dispatcher(handler).send(CREDS, "token-1")

    assert result["success"] is True
    assert seen["auth"] == "Bearer token-1"
    assert seen["body"] == {
        "to": "max@club.com",
        "recipientName": "Max",
        "username": "max@club.com",
        "password": "Secret123!",
        "userType": "staff",
        "clubName": "Riverside FC",
    }


def test_club_name_omitted_when_missing():
    creds = Credential(
        email="jane@x.com", username="jane", password="jane1234", recipient_name="Jane", user_type=UserType.PLAYER
    )
    assert "clubName" not in creds.as_email_payload()


def test_no_token():
    with pytest.raises(EmailDispatchError) as exc:
        _dispatcher(lambda r: httpx.Response(200, json={})).send(CREDS, None)
    assert exc.value.message == "Not authenticated"


def test_error_field_surfaced():
    def handler(request):
        return httpx.Response(500, json={"error": "SMTP connection refused"})

    with pytest.raises(EmailDispatchError) as exc:
        _dispatcher(handler).send(CREDS, "token-1")
    assert exc.value.message == "SMTP connection refused"
    assert exc.value.status_code == 500


def test_non_json_error_generic_message():
    with pytest.raises(EmailDispatchError) as exc:
        _dispatcher(lambda r: httpx.Response(502, text="bad gateway")).send(CREDS, "token-1")
    assert exc.value.message == "Failed to send email"


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(EmailDispatchError) as exc:
        _dispatcher(handler).send(CREDS, "token-1")
    assert exc.value.message == "Failed to send email"
