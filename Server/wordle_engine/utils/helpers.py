"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import g, has_app_context, request


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = request_obj.remote_addr or 'unknown'
    user = g.get('user') if has_app_context() else None

    return {
        'user_ip': user_ip,
        'user_id': user['id'] if user else None
    }


def get_bearer_token(request_obj=None) -> Optional[str]:
    """Return the token from an 'Authorization: Bearer <token>' header, if any."""
    if request_obj is None:
        request_obj = request

    auth_header = request_obj.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None

    token = auth_header[len('Bearer '):].strip()
    return token or None
