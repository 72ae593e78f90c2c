import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from relayops.api.deps import router_config
from relayops.core.config import RouterConfig
from relayops.core.errors import RelayOpsError
from relayops.services.events_ingest import process_webhook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stripe", tags=["stripe"])


@router.get("/webhook")
def stripe_webhook_ping():
    return {}


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    config: RouterConfig = Depends(router_config),  # noqa: B008
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
):
    # 서명 검증은 raw bytes 기준. body를 json으로 먼저 파싱하면 안 됨.
    payload = await request.body()

    try:
        # Slack 전송이 블로킹이라 threadpool에서 실행
        outcome = await run_in_threadpool(process_webhook, payload, stripe_signature, config)
    except RelayOpsError as e:
        if e.operator_visible:
            logger.error("Stripe webhook failed [%s]: %s", e.code, e.message)
        else:
            logger.warning("Stripe webhook rejected [%s]: %s", e.code, e.message)
        raise HTTPException(status_code=e.status_code, detail=e.code) from e

    return {
        "ok": True,
        "forwarded": outcome.forwarded,
        "event_id": outcome.event_id,
        "event_type": outcome.event_type,
    }
