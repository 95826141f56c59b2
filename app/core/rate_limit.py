"""
Simple in-memory rate limiter for the provider-backed interview endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict
from fastapi import Request, HTTPException, status

from app.core.config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

logger = logging.getLogger(__name__)

# {ip: [timestamps]}
rate_limit_store: Dict[str, list] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded IP (from proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()
    
    if request.client:
        return request.client.host
    
    return "unknown"


def check_rate_limit(
    request: Request,
    max_requests: int = RATE_LIMIT_MAX_REQUESTS,
    window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
) -> None:
    """
    Check if client has exceeded rate limit.
    
    Args:
        request: FastAPI request object
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds
        
    Raises:
        HTTPException: 429 if the client exceeded the limit
    """
    ip = get_client_ip(request)
    now = time.time()

    rate_limit_store[ip] = [
        timestamp for timestamp in rate_limit_store[ip]
        if now - timestamp < window_seconds
    ]

    if len(rate_limit_store[ip]) >= max_requests:
        logger.warning(f"Rate limit exceeded: ip={ip}, path={request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many requests. Please wait {window_seconds} seconds and try again.",
        )

    rate_limit_store[ip].append(now)


def interview_rate_limit(request: Request) -> None:
    """Dependency form of check_rate_limit using configured limits."""
    check_rate_limit(request)


def reset_rate_limits() -> None:
    """Clear all tracked requests."""
    rate_limit_store.clear()
