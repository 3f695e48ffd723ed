"""
Authentication Decorators

Contains decorators for attaching the caller identity to HTTP requests.
"""

from functools import wraps
from flask import g

from .helpers import get_bearer_token


def optional_auth(f):
    """
    Decorator that resolves the caller identity when a bearer token is sent.

    Sets g.user to the verified user dict and g.auth_token to the raw token,
    or both to None for guests. Missing,
    expired or invalid tokens never reject the request; the caller simply
    plays anonymously.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.auth_service import get_auth_service

        g.user = None
        g.auth_token = None
        token = get_bearer_token()
        auth_service = get_auth_service()

        if token and auth_service:
            result = auth_service.verify_token(token)
            if result['success']:
                g.user = result['user']
                g.auth_token = token

        return f(*args, **kwargs)

    return decorated_function
