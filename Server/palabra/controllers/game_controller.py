"""
Game Controller

Handles the daily word, guess check and health endpoints.
"""

import datetime

from flask import Blueprint, current_app, jsonify, request

from ..config.game_settings import get_word_statistics
from ..services.word_service import get_word_service, is_well_formed_guess, seed_for_date, seeded_index
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)

# Last calendar day a word was served for; a change is logged as a game event
_last_served_day = None


def _word_service_unavailable(action):
    error_response = {
        'success': False,
        'error': 'Word service unavailable'
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), 500


def _note_served_day(day, word_count):
    global _last_served_day
    if day != _last_served_day:
        _last_served_day = day
        game_logger.log_game_event(
            'day_started', request.remote_addr or 'unknown',
            date=day.isoformat(), word_index=seeded_index(seed_for_date(day), word_count)
        )


@game_bp.route('/daily', methods=['GET'])
def daily_word():
    """Return the word of the day, identical for every caller on the same date."""
    try:
        word_service = get_word_service()
        if not word_service:
            return _word_service_unavailable('daily_word')

        game_logger.log_user_action(request, 'daily_word')

        today = datetime.date.today()
        response_data = {'word': word_service.get_daily_word(today)}
        _note_served_day(today, len(word_service.word_list))

        game_logger.log_server_response(request, 'daily_word', True, response_data, date=today.isoformat())
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'daily_word')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'daily_word', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/check', methods=['POST'])
def check_guess():
    """
    Dictionary check for a guess.

    Answers {"result": bool} only. Malformed bodies and guesses of the wrong
    length or alphabet get {"result": false} without a dictionary lookup and
    without a reason.
    """
    try:
        word_service = get_word_service()
        if not word_service:
            return _word_service_unavailable('check_guess')

        data = request.get_json(silent=True)
        guess = data.get('guess') if isinstance(data, dict) else None

        game_logger.log_user_action(
            request, 'check_guess',
            guess=guess if isinstance(guess, str) else None,
            guess_type=type(guess).__name__
        )

        if not is_well_formed_guess(guess):
            response_data = {'result': False}
            game_logger.log_server_response(
                request, 'check_guess', True, response_data,
                validation_error='malformed guess'
            )
            return jsonify(response_data)

        response_data = {'result': word_service.is_valid_word(guess)}
        game_logger.log_server_response(request, 'check_guess', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'check_guess')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'check_guess', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        word_service = get_word_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if word_service else 'degraded',
            'date': datetime.date.today().isoformat(),
            'word_count': len(word_service.word_list) if word_service else 0,
            'word_statistics': get_word_statistics(word_service.word_list) if word_service else None,
            'scoring_policy': current_app.config.get('SCORING_POLICY'),
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
