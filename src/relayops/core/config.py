from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from relayops.core.errors import ConfigInvalidError


def parse_csv(value: str | None) -> list[str]:
    """ "invoice.*, charge.failed ," -> ["invoice.*", "charge.failed"] """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class RouterConfig:
    """
    요청 처리에 필요한 설정 값 (불변).
    컴포넌트는 환경변수를 직접 읽지 않고 이 값을 인자로 받는다.
    """

    stripe_webhook_secret: str
    slack_webhook_url: str | None
    allowlist_patterns: tuple[str, ...] = ()
    denylist_patterns: tuple[str, ...] = ()
    signature_tolerance_sec: int = 300
    slack_timeout_sec: float = 5.0

    @property
    def is_valid(self) -> bool:
        if not self.stripe_webhook_secret:
            return False
        if not self.slack_webhook_url:
            return False
        return True

    def ensure_valid(self) -> None:
        missing = []
        if not self.stripe_webhook_secret:
            missing.append("STRIPE_WEBHOOK_SECRET")
        if not self.slack_webhook_url:
            missing.append("SLACK_WEBHOOK_URL")
        if missing:
            raise ConfigInvalidError(f"Service not configured. Missing: {', '.join(missing)}")


class Settings(BaseSettings):
    env: str = "local"
    log_level: str = "INFO"

    stripe_webhook_secret: SecretStr | None = None
    slack_webhook_url: SecretStr | None = None

    # comma-separated glob patterns, e.g. "invoice.*,charge.failed"
    stripe_event_allowlist: Annotated[list[str], NoDecode] = []
    stripe_event_denylist: Annotated[list[str], NoDecode] = []

    # Stripe SDK 기본값과 동일 (5분)
    # 0 이하는 SDK에서 replay 검사 off 또는 전부 거절이 되므로 허용하지 않음
    stripe_signature_tolerance_sec: int = Field(default=300, gt=0)
    slack_timeout_sec: float = 5.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("stripe_event_allowlist", "stripe_event_denylist", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return parse_csv(value)
        return value

    def router_config(self) -> RouterConfig:
        secret = self.stripe_webhook_secret
        webhook = self.slack_webhook_url
        return RouterConfig(
            stripe_webhook_secret=secret.get_secret_value() if secret else "",
            slack_webhook_url=webhook.get_secret_value() if webhook else None,
            allowlist_patterns=tuple(self.stripe_event_allowlist),
            denylist_patterns=tuple(self.stripe_event_denylist),
            signature_tolerance_sec=self.stripe_signature_tolerance_sec,
            slack_timeout_sec=self.slack_timeout_sec,
        )


settings = Settings()
