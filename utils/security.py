"""
Security Module - Client IP lookup and rate limiting for public forms
"""

import threading
import time
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
_rate_limit_lock = threading.Lock()
_last_sweep = 0.0


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def _sweep_stale(current_time, window):
    """Drop every IP whose newest request is outside the window. Caller holds the lock."""
    global _last_sweep
    if current_time - _last_sweep < window:
        return
    _last_sweep = current_time
    stale = [ip for ip, history in RATE_LIMIT_REQUESTS.items()
             if not history or current_time - history[-1][0] >= window]
    for ip in stale:
        del RATE_LIMIT_REQUESTS[ip]
    if stale:
        current_app.logger.debug(f"Dropped rate limit history for {len(stale)} idle clients")


def check_rate_limit(endpoint='contact'):
    """Check if IP is within rate limit"""
    client_ip = get_client_ip()
    current_time = time.time()
    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', 10)
    window = current_app.config.get('RATE_LIMIT_WINDOW', 60)

    with _rate_limit_lock:
        _sweep_stale(current_time, window)

        # Clean old requests outside the window
        history = [
            (ts, ep) for ts, ep in RATE_LIMIT_REQUESTS.pop(client_ip, [])
            if current_time - ts < window
        ]

        # Check if limit exceeded
        endpoint_requests = [ep for ts, ep in history if ep == endpoint]
        if len(endpoint_requests) >= max_requests:
            RATE_LIMIT_REQUESTS[client_ip] = history
            current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {endpoint}")
            return False

        # Add current request
        history.append((current_time, endpoint))
        RATE_LIMIT_REQUESTS[client_ip] = history
        return True


def reset_rate_limits():
    global _last_sweep
    with _rate_limit_lock:
        RATE_LIMIT_REQUESTS.clear()
        _last_sweep = 0.0


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits'
]
