from __future__ import annotations

from collections.abc import Sequence

from relayops.core.patterns import matches_any


def event_type_is_allowed(
    event_type: str,
    allowlist_patterns: Sequence[str],
    denylist_patterns: Sequence[str],
) -> bool:
    """
    allow 먼저, deny 나중. 둘 다 매치되면 deny가 이긴다.
    allowlist가 비어 있으면 "기본 허용" 후 deny만 적용.
    """
    if allowlist_patterns and not matches_any(event_type, tuple(allowlist_patterns)):
        return False
    if denylist_patterns and matches_any(event_type, tuple(denylist_patterns)):
        return False
    return True
