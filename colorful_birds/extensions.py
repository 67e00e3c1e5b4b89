# colorful_birds/extensions.py
"""
Инициализация расширений Flask и глобальных объектов.

Этот файл централизует создание экземпляров расширений (SocketIO, Limiter),
чтобы избежать циклических импортов и упростить управление в фабрике приложений (app factory).
"""

from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import queue

# --- Расширения Flask ---

# SocketIO для рассылки состояния стола клиентам отображения.
# cors_allowed_origins="*" - разрешает все источники.
socketio = SocketIO(cors_allowed_origins="*", compress=True)

# Limiter для ограничения частоты запросов (rate limiting)
# key_func=get_remote_address использует IP-адрес клиента для отслеживания
limiter = Limiter(key_func=get_remote_address)


# --- Глобальное управление состоянием ---

# Потокобезопасная очередь уведомлений.
# Отложенные шаги анимации и REST-маршруты кладут сюда сообщения,
# фоновый воркер забирает их и отправляет через SocketIO.
notification_queue: queue.Queue = queue.Queue()
