from __future__ import annotations

import hashlib
import hmac
import json
import time
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from relayops.core.config import RouterConfig

SECRET = "whsec_test_secret"
SLACK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


def _sign(payload: bytes, secret: str = SECRET, timestamp: int | None = None) -> str:
    ts = int(time.time()) if timestamp is None else timestamp
    mac = hmac.new(secret.encode("utf-8"), f"{ts}.".encode("utf-8") + payload, hashlib.sha256)
    return f"t={ts},v1={mac.hexdigest()}"


@pytest.fixture
def sign() -> Callable[..., str]:
    return _sign


@pytest.fixture
def config() -> RouterConfig:
    return RouterConfig(stripe_webhook_secret=SECRET, slack_webhook_url=SLACK_URL)


@pytest.fixture
def invoice_event() -> dict:
    return {
        "id": "evt_1Invoice",
        "object": "event",
        "type": "invoice.payment_failed",
        "livemode": False,
        "created": 1700000000,
        "data": {
            "object": {
                "id": "in_123",
                "object": "invoice",
                "amount_due": 5000,
                "currency": "usd",
                "customer_email": "a@b.com",
            }
        },
    }


@pytest.fixture
def payload(invoice_event) -> bytes:
    return json.dumps(invoice_event).encode("utf-8")


@pytest.fixture
def slack_post(monkeypatch) -> MagicMock:
    """requests.post 대체. 기본은 200 "ok"."""
    resp = MagicMock()
    resp.status_code = 200
    resp.text = "ok"
    mock = MagicMock(return_value=resp)
    monkeypatch.setattr("relayops.services.notifications.slack.requests.post", mock)
    return mock
