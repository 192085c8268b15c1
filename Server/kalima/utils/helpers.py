"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request

USER_ID_HEADER = 'X-User-Id'


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_id = (request_obj.headers.get(USER_ID_HEADER) or '').strip() or None

    return {
        'user_ip': request_obj.remote_addr or 'unknown',
        'user_id': user_id
    }
