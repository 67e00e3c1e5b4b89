import logging
from flask import Flask
from .extensions import (
    socketio,
    limiter,
    notification_queue
)
from .globals import log_event
from .workers import start_notification_consumer, start_animation_driver

# Получаем логгер
logger = logging.getLogger(__name__)

def _configure_logging(app):
    """Настраивает файловый логгер."""
    file_handler = logging.FileHandler(app.config['LOG_FILE'], encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    logger.info("Файловый логгер настроен.")

def _init_extensions(app):
    """Инициализирует расширения Flask."""
    socketio.init_app(app, async_mode=app.config['SOCKETIO_ASYNC_MODE'])
    limiter.init_app(app)
    logger.info("Расширения Flask (SocketIO, Limiter) инициализированы.")

def _init_services(app):
    """Инициализирует и внедряет сервисы приложения."""

    # Импорты сервисов здесь, чтобы избежать циклических зависимостей.
    from .services.game_service import GameService
    from .services.game_factory import GameFactory
    from .services.animation_scheduler import AnimationScheduler

    scheduler = AnimationScheduler(log_event=log_event)

    game_factory = GameFactory(
        config=app.config,
        log_event=log_event,
        notification_queue=notification_queue,
        scheduler=scheduler
    )

    game_service = GameService(
        factory=game_factory,
        notification_queue=notification_queue
    )

    # Прикрепляем главный сервис и планировщик к экземпляру приложения
    app.game_service = game_service
    app.animation_scheduler = scheduler
    logger.info("Игровые сервисы (GameService, Factory, Scheduler) инициализированы.")

def _register_blueprints(app):
    """Регистрирует все маршруты API (Blueprints)."""
    from .api.main_routes import bp as main_bp
    app.register_blueprint(main_bp)

    logger.info("Blueprints (маршруты API) зарегистрированы.")

def _register_socketio_handlers():
    """
    Импортирует обработчики SocketIO для их регистрации.
    """
    # Этот импорт регистрирует обработчики в экземпляре socketio
    from .sockets import connection_handlers
    from .sockets import game_handlers
    logger.info("Обработчики SocketIO (connection, game) зарегистрированы.")

def _start_background_workers(app):
    logger.info("Запуск фонового потока-потребителя (QueueConsumer)...")
    start_notification_consumer(socketio, notification_queue)

    logger.info("Запуск цикла планировщика анимации (AnimationDriver)...")
    start_animation_driver(socketio, app, app.animation_scheduler, app.config['SCHEDULER_TICK'])

def create_app(config_overrides=None):
    """
    Фабрика приложений (Паттерн Application Factory).
    Возвращает (app, socketio).
    """

    app = Flask(
        __name__,
        instance_relative_config=True
    )

    # 1. Загрузка конфигурации: базовый класс -> instance/config.py -> переопределения
    app.config.from_object('colorful_birds.config.Config')
    app.config.from_pyfile('config.py', silent=True)
    if config_overrides:
        app.config.update(config_overrides)

    # 2. Настройка логирования
    _configure_logging(app)

    # 3. Регистрация обработчиков SocketIO (до init_app: каждый новый сервер
    #    получает их из socketio.handlers)
    _register_socketio_handlers()

    # 4. Инициализация расширений
    _init_extensions(app)

    # 5. Инициализация сервисов
    _init_services(app)

    # 6. Регистрация Blueprints (маршрутов API)
    _register_blueprints(app)

    # 7. Запуск фоновых воркеров
    if app.config['START_BACKGROUND_WORKERS']:
        _start_background_workers(app)

    app.logger.info(f"Приложение 'colorful-birds' создано.")
    app.logger.info(f"Путь к логам: {app.config['LOG_FILE']}")

    return app, socketio
