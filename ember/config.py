from __future__ import annotations
import os
from typing import Optional


# Defaults
_DEFAULT_MAX_EVAL_DEPTH = 150
_DEFAULT_MAX_PARSE_DEPTH = 200
_DEFAULT_SCRATCH_LIMIT = 1 << 20
_DEFAULT_ARENA_LIMIT = 0


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 0 else default


def _limit(var: str, default: int) -> Optional[int]:
    # 0 disables the limit
    value = int_from_env(var, default)
    return value or None


def get_max_eval_depth() -> int:
    return int_from_env('EMBER_MAX_EVAL_DEPTH', _DEFAULT_MAX_EVAL_DEPTH) or _DEFAULT_MAX_EVAL_DEPTH


def get_max_parse_depth() -> int:
    return int_from_env('EMBER_MAX_PARSE_DEPTH', _DEFAULT_MAX_PARSE_DEPTH) or _DEFAULT_MAX_PARSE_DEPTH


def get_scratch_limit() -> Optional[int]:
    return _limit('EMBER_SCRATCH_LIMIT', _DEFAULT_SCRATCH_LIMIT)


def get_arena_limit() -> Optional[int]:
    return _limit('EMBER_ARENA_LIMIT', _DEFAULT_ARENA_LIMIT)
