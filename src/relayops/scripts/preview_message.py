"""
Stripe event JSON 파일을 Slack 메시지로 렌더링해서 출력만 한다 (전송 X, 서명 검증 X).

    python -m relayops.scripts.preview_message event.json [--ignore-filters]

allow/deny 설정은 .env / 환경변수에서 읽는다.
exit code: 0 = 출력함, 1 = 이벤트 파일이 아님, 2 = 필터에 걸림
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from relayops.core.config import RouterConfig, settings
from relayops.core.stripe_events import event_type_is_allowed
from relayops.models.event import Event
from relayops.services.notifications.templates import event_to_slack_message


def main(argv: Optional[Sequence[str]] = None, *, config: Optional[RouterConfig] = None) -> int:
    parser = argparse.ArgumentParser(description="Preview the Slack message for a Stripe event")
    parser.add_argument("event_file", type=Path)
    parser.add_argument("--ignore-filters", action="store_true", help="render even if allow/deny would drop it")
    args = parser.parse_args(argv)

    config = config or settings.router_config()

    try:
        event = Event.model_validate_json(args.event_file.read_bytes())
    except (OSError, ValidationError) as e:
        print(f"❌ Not a Stripe event: {args.event_file} ({type(e).__name__})")
        return 1

    allowed = event_type_is_allowed(event.type, config.allowlist_patterns, config.denylist_patterns)
    if not allowed and not args.ignore_filters:
        print(f"⏭️ Event type {event.type} is not allowed. Skipping...")
        return 2

    print(f"✅ {event.type} would be {'forwarded' if allowed else 'dropped (rendered anyway)'}")
    print("----- slack payload -----")
    print(json.dumps(event_to_slack_message(event), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
