"""
Decorators Module - Request guards for the public JSON endpoints
"""

from functools import wraps
from flask import jsonify
from .security import check_rate_limit


def rate_limited(endpoint):
    """Decorator to reject requests over the per-IP limit for endpoint"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not check_rate_limit(endpoint):
                return jsonify({'error': 'Too many requests. Please try again later.'}), 429
            return f(*args, **kwargs)
        return decorated_function
    return decorator
