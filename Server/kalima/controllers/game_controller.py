"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify

from ..config.game_settings import get_word_statistics
from ..services.game_service import get_game_service
from ..services.profile_service import get_profile_service
from ..utils.decorators import require_user
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _error(action: str, message: str, status: int):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status


def _state_response(action: str, session, **log_details):
    response_data = {
        'success': True,
        'state': session.snapshot()
    }
    game_logger.log_server_response(request, action, True, response_data, **log_details)
    return jsonify(response_data)


@game_bp.route('/game', methods=['GET'])
@require_user
def get_game():
    """Open or restore the player's current puzzle."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        user_id = request.user_profile.user_id
        game_logger.log_user_action(request, 'open_game')

        session = game_service.open_session(user_id)
        return _state_response('open_game', session, phase=session.phase.value)

    except Exception as e:
        game_logger.log_error(request, e, 'open_game')
        return _error('open_game', str(e), 500)


@game_bp.route('/game/key', methods=['POST'])
@require_user
async def press_key():
    """Apply one keyboard key (a letter, Backspace or Enter)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or not isinstance(data.get('key'), str) or not data['key']:
            return _error('press_key', 'Key is required', 400)

        key = data['key']
        game_logger.log_user_action(request, 'press_key', key=key)

        session = game_service.open_session(request.user_profile.user_id)
        with session.exclusive() as acquired:
            if not acquired or session.validating:
                return _error('press_key', 'Validation in progress', 409)
            changed = await session.press_key(key)

        return _state_response('press_key', session, key=key, changed=changed)

    except Exception as e:
        game_logger.log_error(request, e, 'press_key')
        return _error('press_key', str(e), 500)


@game_bp.route('/game/guess', methods=['POST'])
@require_user
async def submit_guess():
    """Submit a whole word as the next guess."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or not isinstance(data.get('guess'), str):
            return _error('submit_guess', 'Guess is required', 400)

        guess = data['guess']
        game_logger.log_user_action(request, 'submit_guess', guess=guess, guess_length=len(guess))

        session = game_service.open_session(request.user_profile.user_id)
        with session.exclusive() as acquired:
            if not acquired or session.validating:
                return _error('submit_guess', 'Validation in progress', 409)
            accepted = await session.submit_word(guess)

        return _state_response('submit_guess', session, guess=guess, accepted=accepted,
                               game_over=session.state.game_over)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess')
        return _error('submit_guess', str(e), 500)


@game_bp.route('/game/mode', methods=['POST'])
@require_user
def set_mode():
    """Switch between the daily word and a random word."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or not isinstance(data.get('random'), bool):
            return _error('set_mode', 'Field "random" must be true or false', 400)

        game_logger.log_user_action(request, 'set_mode', random_mode=data['random'])

        session = game_service.set_random_mode(request.user_profile.user_id, data['random'])
        return _state_response('set_mode', session, random_mode=session.random_mode)

    except Exception as e:
        game_logger.log_error(request, e, 'set_mode')
        return _error('set_mode', str(e), 500)


@game_bp.route('/game/share', methods=['GET'])
@require_user
def share_result():
    """Share text for a finished puzzle."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'share')

        session = game_service.open_session(request.user_profile.user_id)
        text = session.share_text()
        if text is None:
            return _error('share', 'Game is not over yet', 409)

        response_data = {
            'success': True,
            'text': text
        }
        game_logger.log_server_response(request, 'share', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'share')
        return _error('share', str(e), 500)


@game_bp.route('/stats', methods=['GET'])
@require_user
def get_stats():
    """Statistics for the requesting player."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_stats')

        stats = game_service.get_stats(request.user_profile.user_id)
        response_data = {
            'success': True,
            'stats': {
                **stats.to_dict(),
                'winPercentage': stats.win_percentage
            }
        }
        game_logger.log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_stats')
        return _error('get_stats', str(e), 500)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        profile_service = get_profile_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': len(game_service.sessions) if game_service else 0,
            'cached_words': len(game_service.pipeline.cache) if game_service else 0,
            'profiles_available': profile_service is not None,
            'words': get_word_statistics(),
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
