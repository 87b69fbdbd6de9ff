# core/rate_limiter.py

import time
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException, Request

from core.logging_config import logger


# In-memory sliding window, per process.
_rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def check_rate_limit(identifier: str, max_requests: int, window_seconds: int) -> Tuple[bool, int]:
    """
    Record one hit for `identifier`.
    Returns (allowed, remaining) for the current window.
    """
    now = time.time()
    window_start = now - window_seconds

    hits = [ts for ts in _rate_limit_store[identifier] if ts > window_start]

    if len(hits) >= max_requests:
        _rate_limit_store[identifier] = hits
        return False, 0

    hits.append(now)
    _rate_limit_store[identifier] = hits
    return True, max_requests - len(hits)


def client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # first hop is the original client
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def require_rate_limit(
    request: Request,
    scope: str,
    max_requests: int,
    window_seconds: int,
    identifier: Optional[str] = None,
) -> int:
    """
    Raises 429 when `scope` has been hit too often by this client.
    """
    key = f"{scope}:{identifier or client_ip(request)}"
    allowed, remaining = check_rate_limit(key, max_requests, window_seconds)

    if not allowed:
        logger.warning(f"Rate limit exceeded for {key}")
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "Retry-After": str(window_seconds),
            },
        )

    return remaining


def reset_rate_limits():
    _rate_limit_store.clear()
