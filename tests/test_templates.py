"""Tests for the Stripe event -> Slack message formatter."""

from __future__ import annotations

import json

import pytest

from relayops.models.event import Event
from relayops.services.notifications.templates import (
    COLOR_ALERT,
    COLOR_NEUTRAL,
    COLOR_SUCCESS,
    COLOR_WARNING,
    amount_text,
    customer_email,
    dashboard_url,
    event_to_slack_message,
    format_amount,
    pick_color,
    summary_text,
)


def _event(obj: dict, *, type_: str = "charge.succeeded", livemode: bool = False, event_id: str = "evt_1") -> Event:
    return Event.model_validate(
        {"id": event_id, "type": type_, "livemode": livemode, "data": {"object": obj}}
    )


def _blocks(message: dict) -> list[dict]:
    return message["attachments"][0]["blocks"]


def _field_texts(message: dict) -> list[str]:
    return [f["text"] for f in _blocks(message)[2]["fields"]]


# ---------------------------------------------------------------------------
# Example scenario
# ---------------------------------------------------------------------------


def test_invoice_payment_failed_example(invoice_event) -> None:
    message = event_to_slack_message(Event.model_validate(invoice_event))

    assert message["text"] == "Stripe invoice.payment_failed · 50.00 USD · a@b.com"
    assert message["attachments"][0]["color"] == COLOR_ALERT


def test_full_block_layout(invoice_event) -> None:
    message = event_to_slack_message(Event.model_validate(invoice_event))
    blocks = _blocks(message)

    assert [b["type"] for b in blocks] == ["header", "section", "section", "context", "actions"]
    assert blocks[0]["text"] == {"type": "plain_text", "text": "Stripe Notification", "emoji": True}
    assert blocks[1]["text"]["text"] == message["text"]
    assert _field_texts(message) == [
        "*Event:* `invoice.payment_failed`",
        "*Mode:* Test",
        "*Amount:* 50.00 USD",
        "*Customer:* a@b.com",
        "*Object:* <https://dashboard.stripe.com/test/invoices/in_123|in_123>",
    ]
    assert blocks[3]["elements"][0]["text"] == (
        "Event: <https://dashboard.stripe.com/test/events/evt_1Invoice|evt_1Invoice>"
    )
    button = blocks[4]["elements"][0]
    assert button["url"] == "https://dashboard.stripe.com/test/invoices/in_123"
    assert button["style"] == "primary"
    assert button["text"]["text"] == "View in Dashboard"


def test_format_is_pure(invoice_event) -> None:
    event = Event.model_validate(invoice_event)
    first = event_to_slack_message(event)
    second = event_to_slack_message(event)
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


# ---------------------------------------------------------------------------
# Amount
# ---------------------------------------------------------------------------


class TestAmount:
    def test_priority_order(self) -> None:
        obj = _event({"amount": 100, "amount_total": 200, "amount_due": 300, "currency": "eur"}).data_object
        assert amount_text(obj) == "1.00 EUR"

    def test_falls_through_to_amount_paid(self) -> None:
        assert amount_text(_event({"amount_paid": 1999, "currency": "gbp"}).data_object) == "19.99 GBP"

    def test_zero_is_treated_as_absent(self) -> None:
        obj = _event({"amount": 0, "amount_total": 1250, "currency": "usd"}).data_object
        assert amount_text(obj) == "12.50 USD"

    def test_currency_code_fallback(self) -> None:
        assert amount_text(_event({"amount": 500, "currency_code": "cad"}).data_object) == "5.00 CAD"

    def test_missing_currency_omits_amount(self) -> None:
        assert amount_text(_event({"amount": 500}).data_object) is None

    def test_missing_amount_omits_amount(self) -> None:
        assert amount_text(_event({"currency": "usd"}).data_object) is None

    def test_zero_decimal_currency_is_not_special_cased(self) -> None:
        assert format_amount(500, "jpy") == "5.00 JPY"


# ---------------------------------------------------------------------------
# Customer
# ---------------------------------------------------------------------------


class TestCustomerEmail:
    def test_priority_order(self) -> None:
        obj = _event({"customer_email": "1@x.com", "receipt_email": "2@x.com", "email": "3@x.com"}).data_object
        assert customer_email(obj) == "1@x.com"

    def test_empty_values_are_skipped(self) -> None:
        assert customer_email(_event({"receipt_email": "", "email": "3@x.com"}).data_object) == "3@x.com"

    def test_nested_customer_details(self) -> None:
        obj = _event({"customer_details": {"email": "n@x.com"}}).data_object
        assert customer_email(obj) == "n@x.com"

    def test_none_present(self) -> None:
        assert customer_email(_event({"customer_details": None}).data_object) is None


# ---------------------------------------------------------------------------
# Deep links
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "obj_type, path",
    [
        ("payment_intent", "payments"),
        ("charge", "payments"),
        ("invoice", "invoices"),
        ("customer", "customers"),
        ("subscription", "subscriptions"),
        ("checkout.session", "checkouts/sessions"),
    ],
)
def test_dashboard_url_by_object(obj_type: str, path: str) -> None:
    live = _event({"object": obj_type, "id": "obj_9"}, livemode=True)
    test = _event({"object": obj_type, "id": "obj_9"}, livemode=False)
    assert dashboard_url(live) == f"https://dashboard.stripe.com/{path}/obj_9"
    assert dashboard_url(test) == f"https://dashboard.stripe.com/test/{path}/obj_9"


def test_dashboard_url_unknown_object_uses_event_id() -> None:
    event = _event({"object": "payout", "id": "po_1"}, livemode=True, event_id="evt_42")
    assert dashboard_url(event) == "https://dashboard.stripe.com/events/evt_42"


def test_dashboard_url_missing_object_id_uses_event_id() -> None:
    event = _event({"object": "invoice"}, event_id="evt_42")
    assert dashboard_url(event) == "https://dashboard.stripe.com/test/events/evt_42"


# ---------------------------------------------------------------------------
# Color / text
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "event_type, color",
    [
        ("charge.failed", COLOR_ALERT),
        ("charge.dispute.created", COLOR_ALERT),
        ("charge.refunded", COLOR_ALERT),
        ("payment_intent.succeeded", COLOR_SUCCESS),
        ("checkout.session.completed", COLOR_SUCCESS),
        ("invoice.paid", COLOR_SUCCESS),
        ("payment_intent.requires_action", COLOR_WARNING),
        ("customer.source.pending", COLOR_WARNING),
        ("customer.created", COLOR_NEUTRAL),
        ("Invoice.PAID", COLOR_SUCCESS),
        # alert probes win over success probes
        ("invoice.paid.refunded", COLOR_ALERT),
    ],
)
def test_pick_color(event_type: str, color: str) -> None:
    assert pick_color(event_type) == color


def test_summary_text_without_optional_segments() -> None:
    assert summary_text("customer.created", None, None) == "Stripe customer.created"
    assert summary_text("customer.created", None, "a@b.com") == "Stripe customer.created · a@b.com"
    assert summary_text("charge.succeeded", "1.00 USD", None) == "Stripe charge.succeeded · 1.00 USD"


def test_minimal_event_renders() -> None:
    message = event_to_slack_message(_event({}, type_="customer.created", livemode=True))

    assert message["text"] == "Stripe customer.created"
    assert message["attachments"][0]["color"] == COLOR_NEUTRAL
    assert _field_texts(message) == ["*Event:* `customer.created`", "*Mode:* Live"]
    assert _blocks(message)[4]["elements"][0]["url"] == "https://dashboard.stripe.com/events/evt_1"
