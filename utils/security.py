"""
Security Module - Client IP lookup and contact form rate limiting
"""

import time
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
HONEYPOT_FIELD = 'website'


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def check_rate_limit(endpoint='contact'):
    """Check if IP is within rate limit"""
    max_requests = current_app.config.get('CONTACT_RATE_LIMIT', 10)
    window = current_app.config.get('CONTACT_RATE_WINDOW', 60)
    client_ip = get_client_ip()
    current_time = time.time()

    # Clean old requests outside the window
    recent = [
        (ts, ep) for ts, ep in RATE_LIMIT_REQUESTS.get(client_ip, [])
        if current_time - ts < window
    ]
    RATE_LIMIT_REQUESTS[client_ip] = recent

    # Check if limit exceeded
    if sum(1 for _, ep in recent if ep == endpoint) >= max_requests:
        current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {endpoint}")
        return False

    recent.append((current_time, endpoint))
    return True


def is_honeypot_filled(payload):
    """Bots fill every field, including the hidden one"""
    return bool(str(payload.get(HONEYPOT_FIELD) or '').strip())


def reset_rate_limits():
    RATE_LIMIT_REQUESTS.clear()


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'is_honeypot_filled',
    'reset_rate_limits'
]
