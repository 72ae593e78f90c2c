from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from relayops.core.config import RouterConfig
from relayops.core.errors import MissingSignatureError
from relayops.core.stripe_events import event_type_is_allowed
from relayops.integrations.stripe.webhook import construct_event
from relayops.services.notifications.slack import post_to_slack
from relayops.services.notifications.templates import event_to_slack_message

logger = logging.getLogger(__name__)

Deliver = Callable[..., str]


@dataclass(frozen=True)
class WebhookOutcome:
    event_id: str
    event_type: str
    forwarded: bool


def process_webhook(
    payload: bytes,
    signature: Optional[str],
    config: RouterConfig,
    *,
    deliver: Deliver = post_to_slack,
) -> WebhookOutcome:
    """
    verify -> filter -> format -> deliver (요청 1건, 동기).

    - 설정이 불완전하면 아무것도 하지 않고 ConfigInvalidError (네트워크 호출 없음)
    - allow/deny에 걸러진 이벤트는 에러가 아니라 forwarded=False
    - 모든 에러는 이번 요청에서 끝. 재시도 없음.
    """
    config.ensure_valid()

    if not signature or not signature.strip():
        raise MissingSignatureError("Missing Stripe signature")

    event = construct_event(
        payload,
        signature,
        config.stripe_webhook_secret,
        tolerance=config.signature_tolerance_sec,
    )

    if not event_type_is_allowed(event.type, config.allowlist_patterns, config.denylist_patterns):
        logger.info("Event type %s is not allowed. Skipping...", event.type)
        return WebhookOutcome(event_id=event.id, event_type=event.type, forwarded=False)

    message: dict[str, Any] = event_to_slack_message(event)
    deliver(message, config.slack_webhook_url, timeout_sec=config.slack_timeout_sec)
    logger.info("Successfully posted to Slack (event=%s type=%s)", event.id, event.type)

    return WebhookOutcome(event_id=event.id, event_type=event.type, forwarded=True)
