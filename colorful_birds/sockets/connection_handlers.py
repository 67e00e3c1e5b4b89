# colorful_birds/sockets/connection_handlers.py
from flask import request, current_app
from flask_socketio import emit, join_room
from ..extensions import socketio
from ..globals import log_event


@socketio.on('connect')
def handle_connect(auth=None):
    """
    Клиент отображения подключился: добавляем его в комнату стола
    и сразу отправляем текущий снимок партии.
    """
    sid = request.sid
    room = current_app.config['TABLE_ROOM']
    join_room(room)

    log_event("CLIENT_CONNECT", f"Client {sid} joined room '{room}'.")
    emit('game_state', current_app.game_service.get_state())


@socketio.on('disconnect')
def handle_disconnect(*args):
    log_event("CLIENT_DISCONNECT", f"Client {request.sid} disconnected.")


@socketio.on('request_state')
def handle_request_state(data=None):
    """Повторная синхронизация (например, после переподключения)."""
    emit('game_state', current_app.game_service.get_state())
