"""Integration tests for the /slack/commands endpoint."""

import time
from unittest.mock import patch
from urllib.parse import urlencode

import pytest
from fastapi.testclient import TestClient
from slack_sdk.signature import SignatureVerifier

from expense_bot.app import app
from expense_bot.config import Settings

TEST_SIGNING_SECRET = "test_signing_secret_1234"


def _sign_request(body: bytes, secret: str, timestamp: int | None = None) -> tuple[str, str]:
    """Generate Slack-compatible signature headers."""
    ts = str(timestamp if timestamp is not None else int(time.time()))
    signature = SignatureVerifier(signing_secret=secret).generate_signature(
        timestamp=ts, body=body
    )
    return ts, signature


def _command_body(text: str, user_id: str | None = "U123") -> bytes:
    fields = {"token": "legacy", "command": "/expense", "text": text}
    if user_id is not None:
        fields["user_id"] = user_id
    return urlencode(fields).encode()


def _post_command(
    client: TestClient,
    text: str,
    *,
    user_id: str | None = "U123",
    signing_secret: str = TEST_SIGNING_SECRET,
    timestamp: int | None = None,
):
    """Send a signed slash-command POST to /slack/commands."""
    body = _command_body(text, user_id)
    ts, signature = _sign_request(body, signing_secret, timestamp)
    headers = {
        "X-Slack-Request-Timestamp": ts,
        "X-Slack-Signature": signature,
        "Content-Type": "application/x-www-form-urlencoded",
    }
    return client.post("/slack/commands", content=body, headers=headers)


@pytest.fixture
def signed_client(settings: Settings):
    """TestClient with settings patched where the endpoint reads them."""
    with (
        patch("expense_bot.slack.verification.get_settings", return_value=settings),
        patch("expense_bot.slack.router.get_settings", return_value=settings),
        TestClient(app) as client,
    ):
        yield client


# -- Authentication --


def test_invalid_signature_returns_401(signed_client: TestClient):
    body = _command_body("help")
    headers = {
        "X-Slack-Request-Timestamp": str(int(time.time())),
        "X-Slack-Signature": "v0=invalid_signature",
        "Content-Type": "application/x-www-form-urlencoded",
    }
    response = signed_client.post("/slack/commands", content=body, headers=headers)
    assert response.status_code == 401
    assert response.json() == {"detail": "Ugyldig signatur"}


def test_missing_headers_return_401(signed_client: TestClient):
    response = signed_client.post("/slack/commands", content=_command_body("help"))
    assert response.status_code == 401


def test_wrong_secret_returns_401(signed_client: TestClient):
    response = _post_command(signed_client, "help", signing_secret="not-the-secret")
    assert response.status_code == 401


def test_stale_request_returns_401(signed_client: TestClient):
    response = _post_command(signed_client, "help", timestamp=int(time.time()) - 600)
    assert response.status_code == 401


def test_overlong_timestamp_returns_401(signed_client: TestClient):
    body = _command_body("help")
    headers = {
        "X-Slack-Request-Timestamp": "1" * 5000,
        "X-Slack-Signature": "v0=abc",
        "Content-Type": "application/x-www-form-urlencoded",
    }
    response = signed_client.post("/slack/commands", content=body, headers=headers)
    assert response.status_code == 401


# -- Replies --


def test_help_reply_is_plain_text(signed_client: TestClient):
    response = _post_command(signed_client, "")
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/plain; charset=utf-8"
    assert response.text.startswith("Bruk:")
    assert "/expense 120 kaffe #mat" in response.text


def test_invalid_reply(signed_client: TestClient):
    response = _post_command(signed_client, "abc kaffe")
    assert response.status_code == 200
    assert response.text == "Ugyldig format. Prøv: /expense 120 kaffe #mat"


def test_add_then_summaries_and_list(signed_client: TestClient):
    added = _post_command(signed_client, "120 kaffe #mat")
    assert added.status_code == 200
    assert added.text == "✅ Registrert: 120,00\u00a0kr – kaffe (#mat)"

    _post_command(signed_client, "99,50 lunsj")

    today = _post_command(signed_client, "idag")
    assert today.text == "\U0001f4cc I dag: 219,50\u00a0kr"

    month = _post_command(signed_client, "måned")
    assert month.text == "\U0001f4c5 Denne måneden: 219,50\u00a0kr"

    listing = _post_command(signed_client, "liste")
    lines = listing.text.split("\n")
    assert lines[0] == "Siste 10:"
    assert lines[1].startswith("• 99,50\u00a0kr – lunsj (")
    assert lines[2].startswith("• 120,00\u00a0kr – kaffe #mat (")


def test_totals_are_per_user(signed_client: TestClient):
    _post_command(signed_client, "500 sko", user_id="U_OTHER")
    response = _post_command(signed_client, "month", user_id="U123")
    assert response.text == "\U0001f4c5 Denne måneden: 0,00\u00a0kr"


def test_empty_list_reply(signed_client: TestClient):
    response = _post_command(signed_client, "list")
    assert response.text == "Ingen registrerte utgifter ennå."


def test_missing_user_id_is_recorded_as_unknown(signed_client: TestClient):
    _post_command(signed_client, "10 tyggis", user_id=None)
    response = _post_command(signed_client, "today", user_id="unknown")
    assert response.text == "\U0001f4cc I dag: 10,00\u00a0kr"


def test_missing_database_reply(settings: Settings):
    no_db = settings.model_copy(update={"database_url": ""})
    with (
        patch("expense_bot.slack.verification.get_settings", return_value=no_db),
        patch("expense_bot.slack.router.get_settings", return_value=no_db),
        TestClient(app) as client,
    ):
        response = _post_command(client, "120 kaffe")
    assert response.status_code == 200
    assert response.text.startswith("DB mangler.")
