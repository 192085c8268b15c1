"""
Request Decorators

Contains decorators for identifying the player behind an HTTP request.
"""

from functools import wraps
from flask import current_app, request, jsonify

from .helpers import get_user_identity


def require_user(f):
    """
    Decorator to require a known player id for game endpoints.

    The profile is looked up from the X-User-Id header and attached to the
    request as ``request.user_profile``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.profile_service import get_profile_service

        profile_service = get_profile_service()
        if not profile_service:
            return jsonify({
                'success': False,
                'error': 'Profile service unavailable'
            }), 500

        user_id = get_user_identity(request)['user_id']
        if not user_id:
            return jsonify({
                'success': False,
                'error': 'X-User-Id header required'
            }), 401

        profile = profile_service.get_profile(user_id)
        if profile is None:
            return jsonify({
                'success': False,
                'error': 'Unknown user'
            }), 401

        request.user_profile = profile
        return current_app.ensure_sync(f)(*args, **kwargs)

    return decorated_function
