# colorful_birds/sockets/game_handlers.py

from flask import current_app
from flask_socketio import emit
from marshmallow import ValidationError
from ..extensions import socketio
from ..api.schemas import RollRequestSchema

roll_schema = RollRequestSchema()


def _emit_all(notifications):
    for msg in notifications:
        emit(msg['event'], msg['payload'], room=msg['room'])


@socketio.on('start_game')
def handle_start_game(data=None):
    accepted, notifications = current_app.game_service.start_game()
    _emit_all(notifications)


@socketio.on('roll_dice')
def handle_roll_dice(data=None):
    """
    Бросок кубика. data = {"value": 1..6} или ничего (бросает сервер).
    Отложенные шаги анимации придут позже через очередь уведомлений.
    """
    try:
        payload = roll_schema.load(data or {})
    except ValidationError as err:
        emit('request_rejected', {'message': 'Invalid roll request.', 'errors': err.messages})
        return

    accepted, notifications = current_app.game_service.roll_dice(payload['value'])
    _emit_all(notifications)


@socketio.on('next_player')
def handle_next_player(data=None):
    accepted, notifications = current_app.game_service.next_player()
    _emit_all(notifications)


@socketio.on('reset_game')
def handle_reset_game(data=None):
    accepted, notifications = current_app.game_service.reset_game()
    _emit_all(notifications)
