"""
Simple in-memory rate limiter for API endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict
from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)

# {"<scope>:<ip>": [timestamps]}
rate_limit_store: Dict[str, list] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(request: Request, scope: str, max_requests: int = 10, window_seconds: int = 60) -> None:
    """
    Check if client has exceeded rate limit for one scope.

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    key = f"{scope}:{get_client_ip(request)}"
    now = time.time()

    cutoff = now - window_seconds
    rate_limit_store[key] = [
        timestamp for timestamp in rate_limit_store[key]
        if timestamp > cutoff
    ]

    request_count = len(rate_limit_store[key])

    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for {key} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    rate_limit_store[key].append(now)


def rate_limiter(scope: str, max_requests: int = 10, window_seconds: int = 60):
    """Dependency factory applying check_rate_limit to a route."""
    def dependency(request: Request) -> None:
        check_rate_limit(request, scope, max_requests, window_seconds)
    return dependency
