from __future__ import annotations

import logging

import stripe
from pydantic import ValidationError

from relayops.core.errors import MalformedPayloadError, VerificationError
from relayops.models.event import Event

logger = logging.getLogger(__name__)

# Stripe SDK 기본 tolerance (초)
DEFAULT_TOLERANCE_SEC = 300


def construct_event(
    payload: bytes,
    signature: str,
    secret: str,
    *,
    tolerance: int = DEFAULT_TOLERANCE_SEC,
) -> Event:
    """
    Stripe signature 검증 + event 파싱.

    - 서명 검증은 Stripe SDK(WebhookSignature.verify_header)에 맡긴다.
      t=<ts>,v1=<hex>[,v1=...] 헤더 파싱, HMAC-SHA256("{t}.{body}"), constant-time 비교,
      tolerance 밖의 오래된 timestamp 거절까지 포함.
    - payload는 반드시 수신한 raw bytes 그대로여야 한다 (재직렬화 금지).

    실패 시 VerificationError, 서명은 맞는데 본문이 이벤트가 아니면 MalformedPayloadError.
    """
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VerificationError("Payload is not valid UTF-8") from e

    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        raise VerificationError(f"Failed to verify Stripe webhook: {e}") from e

    try:
        return Event.model_validate_json(payload)
    except ValidationError as e:
        logger.debug("Signed payload failed event validation: %s", e)
        raise MalformedPayloadError(f"Signed payload is not a Stripe event ({e.error_count()} errors)") from e
