"""
Profile Controller

Handles player identity endpoints: creation, onboarding flag, nickname
and clearing a player's data.
"""

from flask import Blueprint, request, jsonify

from ..services.game_service import get_game_service
from ..services.profile_service import get_profile_service
from ..utils.decorators import require_user
from ..utils.game_logger import game_logger
from ..utils.helpers import get_user_identity

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('', methods=['POST'])
def get_or_create_profile():
    """Return the caller's profile, creating one if the id is unknown."""
    try:
        profile_service = get_profile_service()
        if not profile_service:
            return jsonify({
                'success': False,
                'error': 'Profile service unavailable'
            }), 500

        user_id = get_user_identity(request)['user_id']
        game_logger.log_user_action(request, 'open_profile', known_id=user_id is not None)

        profile = profile_service.get_or_create_profile(user_id)
        response_data = {
            'success': True,
            'profile': profile.to_dict(),
            'created': profile.user_id != user_id,
            'show_intro': not profile_service.has_played_before(profile.user_id)
        }

        game_logger.log_server_response(request, 'open_profile', True, response_data)
        return jsonify(response_data), 201 if response_data['created'] else 200

    except Exception as e:
        game_logger.log_error(request, e, 'open_profile')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'open_profile', False, error_response)
        return jsonify(error_response), 500


@profile_bp.route('/onboarded', methods=['POST'])
@require_user
def mark_onboarded():
    """Remember that the intro screen has been seen."""
    try:
        profile_service = get_profile_service()
        game_logger.log_user_action(request, 'mark_onboarded')

        profile_service.mark_played(request.user_profile.user_id)

        response_data = {'success': True}
        game_logger.log_server_response(request, 'mark_onboarded', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'mark_onboarded')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'mark_onboarded', False, error_response)
        return jsonify(error_response), 500


@profile_bp.route('', methods=['PATCH'])
@require_user
def update_profile():
    """Set or clear the player's nickname."""
    try:
        profile_service = get_profile_service()

        data = request.get_json(silent=True)
        if data is None or 'nickname' not in data:
            return jsonify({
                'success': False,
                'error': 'Nickname is required'
            }), 400

        nickname = data.get('nickname')
        if nickname is not None and not isinstance(nickname, str):
            return jsonify({
                'success': False,
                'error': 'Nickname must be a string'
            }), 400

        game_logger.log_user_action(request, 'update_profile', nickname=nickname)

        profile = profile_service.set_nickname(request.user_profile.user_id, nickname)
        response_data = {
            'success': True,
            'profile': profile.to_dict()
        }
        game_logger.log_server_response(request, 'update_profile', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'update_profile')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'update_profile', False, error_response)
        return jsonify(error_response), 500


@profile_bp.route('', methods=['DELETE'])
@require_user
def clear_profile():
    """Delete the player's session, statistics and profile."""
    try:
        profile_service = get_profile_service()
        game_service = get_game_service()
        user_id = request.user_profile.user_id

        game_logger.log_user_action(request, 'clear_profile')

        if game_service:
            game_service.clear_user_data(user_id)
        profile_service.delete_profile(user_id)

        response_data = {'success': True}
        game_logger.log_server_response(request, 'clear_profile', True, response_data)
        game_logger.log_game_event(user_id, 'user_data_cleared')
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'clear_profile')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'clear_profile', False, error_response)
        return jsonify(error_response), 500
