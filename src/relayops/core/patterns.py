from __future__ import annotations

import re
from collections.abc import Callable
from functools import lru_cache

# glob 문법은 리터럴 + "*" 하나뿐. 나머지 regex 특수문자는 전부 리터럴 취급.
_WILDCARD = "*"


def glob_to_regex(glob: str) -> re.Pattern[str]:
    escaped = ".*".join(re.escape(part) for part in glob.split(_WILDCARD))
    return re.compile(escaped)


@lru_cache(maxsize=256)
def compile_glob(glob: str) -> Callable[[str], bool]:
    """
    glob -> anchored exact-match predicate.

    "invoice.*" 는 "invoice.paid" 에 매치되지만 "my.invoice.paid" 에는 매치되지 않는다.
    결과는 순수 함수라 캐시해서 요청 간에 공유해도 안전하다.
    """
    regex = glob_to_regex(glob)

    def matches(value: str) -> bool:
        return regex.fullmatch(value) is not None

    return matches


def matches_any(value: str, globs: tuple[str, ...] | list[str]) -> bool:
    return any(compile_glob(g)(value) for g in globs)
