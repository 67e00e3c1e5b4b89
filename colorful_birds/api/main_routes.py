from flask import (
    Blueprint,
    current_app,
    jsonify,
    request
)
from marshmallow import ValidationError

from ..extensions import limiter
from .schemas import RollRequestSchema

# Создаем новый Blueprint
bp = Blueprint('main', __name__, url_prefix='/api')

roll_schema = RollRequestSchema()


def _respond(accepted, notifications):
    """
    Уведомления уходят подписчикам стола через очередь,
    вызывающему возвращается результат и свежий снимок.
    """
    game_service = current_app.game_service
    game_service.dispatch(notifications)
    return jsonify({"accepted": accepted, "state": game_service.get_state()}), 200


@bp.route('/state', methods=['GET'])
def get_state():
    """Текущий снимок партии."""
    return jsonify(current_app.game_service.get_state()), 200


@bp.route('/start', methods=['POST'])
def start_game():
    accepted, notifications = current_app.game_service.start_game()
    return _respond(accepted, notifications)


@bp.route('/roll', methods=['POST'])
@limiter.limit(lambda: current_app.config['ROLL_RATE_LIMIT'])
def roll_dice():
    """
    Бросок кубика текущим игроком.
    Тело: {"value": 1..6} или пусто (тогда бросает сервер).
    """
    try:
        data = roll_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        current_app.logger.info(f"Невалидный запрос на бросок: {err.messages}")
        return jsonify({"error": err.messages}), 400

    accepted, notifications = current_app.game_service.roll_dice(data['value'])
    return _respond(accepted, notifications)


@bp.route('/next', methods=['POST'])
def next_player():
    accepted, notifications = current_app.game_service.next_player()
    return _respond(accepted, notifications)


@bp.route('/reset', methods=['POST'])
def reset_game():
    accepted, notifications = current_app.game_service.reset_game()
    return _respond(accepted, notifications)
