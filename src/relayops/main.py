import logging

from fastapi import FastAPI

from relayops.api.v1.routers.health import router as health_router
from relayops.api.v1.routers.stripe_webhook import router as stripe_router
from relayops.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="RelayOps", version="0.1.0")
app.include_router(health_router, prefix="/api/v1")
app.include_router(stripe_router, prefix="/api/v1")


@app.on_event("startup")
def validate_settings() -> None:
    # 설정이 없어도 기동은 한다. 대신 webhook 요청마다 500으로 거절됨.
    if not settings.router_config().is_valid:
        logger.error("Service not configured. Check STRIPE_WEBHOOK_SECRET / SLACK_WEBHOOK_URL.")
