from __future__ import annotations

from typing import Any, Optional

import requests

from relayops.core.errors import DeliveryError

DEFAULT_TIMEOUT_SEC = 5.0


def post_to_slack(
    message: dict[str, Any],
    webhook_url: Optional[str],
    *,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> str:
    """
    Slack Incoming Webhook으로 전송하고 응답 body(text)를 반환한다.
    재시도 없음: 실패는 DeliveryError로 호출자에게 그대로 올린다.
    """
    if not webhook_url:
        raise DeliveryError("No Slack webhook URL configured")

    try:
        resp = requests.post(webhook_url, json=message, timeout=timeout_sec)
    except requests.RequestException as e:
        raise DeliveryError(f"Slack webhook request failed: {type(e).__name__}") from e

    if not 200 <= resp.status_code < 300:
        raise DeliveryError(f"Slack webhook failed: {resp.status_code} {resp.text}")

    return (resp.text or "").strip()
