"""
Stripe Event -> Slack 메시지 (text + attachments[blocks]).

순수 함수만 둔다. 같은 Event면 항상 같은 dict가 나온다.
필드가 비어 있어도 실패하지 않고 해당 줄만 빠진다.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional, TypeVar

from relayops.models.event import Event, StripeObject

T = TypeVar("T")

SOURCE_NAME = "Stripe"
HEADER_TEXT = "Stripe Notification"
SEPARATOR = " · "

DASHBOARD_LIVE = "https://dashboard.stripe.com"
DASHBOARD_TEST = "https://dashboard.stripe.com/test"

COLOR_ALERT = "#E01E5A"    # red
COLOR_SUCCESS = "#2EB67D"  # green
COLOR_WARNING = "#ECB22E"  # yellow
COLOR_NEUTRAL = "#4A154B"  # purple

# 순서 = 우선순위. 벤더 taxonomy라 문자열/순서 그대로 유지.
COLOR_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("failed", "dispute", "refunded"), COLOR_ALERT),
    (("succeeded", "completed", "paid"), COLOR_SUCCESS),
    (("requires", "pending"), COLOR_WARNING),
)

# 모든 통화를 소수점 2자리로 가정 (JPY 같은 zero-decimal 통화는 특별 취급 안 함)
AMOUNT_DECIMALS = 2

AMOUNT_PROBES: tuple[Callable[[StripeObject], Optional[int]], ...] = (
    lambda o: o.amount,
    lambda o: o.amount_total,
    lambda o: o.amount_due,
    lambda o: o.amount_paid,
)

CURRENCY_PROBES: tuple[Callable[[StripeObject], Optional[str]], ...] = (
    lambda o: o.currency,
    lambda o: o.currency_code,
)

EMAIL_PROBES: tuple[Callable[[StripeObject], Optional[str]], ...] = (
    lambda o: o.customer_email,
    lambda o: o.receipt_email,
    lambda o: o.email,
    lambda o: o.customer_details.email if o.customer_details else None,
)


def first_present(obj: StripeObject, probes: tuple[Callable[[StripeObject], Optional[T]], ...]) -> Optional[T]:
    """probe를 순서대로 평가해서 처음으로 truthy한 값을 반환 (0, "" 는 없는 값 취급)."""
    for probe in probes:
        value = probe(obj)
        if value:
            return value
    return None


def format_amount(amount: Optional[int], currency: Optional[str]) -> Optional[str]:
    if amount is None or currency is None:
        return None
    return f"{amount / 10 ** AMOUNT_DECIMALS:.{AMOUNT_DECIMALS}f} {currency.upper()}"


def amount_text(obj: StripeObject) -> Optional[str]:
    return format_amount(first_present(obj, AMOUNT_PROBES), first_present(obj, CURRENCY_PROBES))


def customer_email(obj: StripeObject) -> Optional[str]:
    return first_present(obj, EMAIL_PROBES)


def dashboard_base(livemode: bool) -> str:
    return DASHBOARD_LIVE if livemode else DASHBOARD_TEST


def event_url(event: Event) -> str:
    return f"{dashboard_base(event.livemode)}/events/{event.id}"


def dashboard_url(event: Event) -> str:
    """inner object 타입별 Dashboard 경로. 모르는 타입이거나 id가 없으면 event 페이지."""
    obj = event.data_object
    if obj.dashboard_path and obj.id:
        return f"{dashboard_base(event.livemode)}/{obj.dashboard_path}/{obj.id}"
    return event_url(event)


def pick_color(event_type: str) -> str:
    t = event_type.lower()
    for needles, color in COLOR_RULES:
        if any(n in t for n in needles):
            return color
    return COLOR_NEUTRAL


def summary_text(event_type: str, amount: Optional[str], email: Optional[str]) -> str:
    parts = [f"{SOURCE_NAME} {event_type}"]
    if amount:
        parts.append(amount)
    if email:
        parts.append(email)
    return SEPARATOR.join(parts)


def _mrkdwn(text: str) -> dict[str, Any]:
    return {"type": "mrkdwn", "text": text}


def event_to_slack_message(event: Event) -> dict[str, Any]:
    obj = event.data_object
    amount = amount_text(obj)
    email = customer_email(obj)
    deep_link = dashboard_url(event)
    text = summary_text(event.type, amount, email)

    fields = [
        _mrkdwn(f"*Event:* `{event.type}`"),
        _mrkdwn(f"*Mode:* {'Live' if event.livemode else 'Test'}"),
    ]
    if amount:
        fields.append(_mrkdwn(f"*Amount:* {amount}"))
    if email:
        fields.append(_mrkdwn(f"*Customer:* {email}"))
    if obj.id:
        fields.append(_mrkdwn(f"*Object:* <{deep_link}|{obj.id}>"))

    blocks: list[dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": HEADER_TEXT, "emoji": True},
        },
        {"type": "section", "text": _mrkdwn(text)},
        {"type": "section", "fields": fields},
        {
            "type": "context",
            "elements": [_mrkdwn(f"Event: <{event_url(event)}|{event.id}>")],
        },
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "View in Dashboard"},
                    "url": deep_link,
                    "style": "primary",
                }
            ],
        },
    ]

    return {
        "text": text,
        "attachments": [{"color": pick_color(event.type), "blocks": blocks}],
    }
