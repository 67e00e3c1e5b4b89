import logging

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

def _notification_queue_consumer(socketio_instance, queue_instance):
    """
    Фоновый воркер (consumer) для обработки очереди уведомлений.
    Извлекает сообщения из `notification_queue` и отправляет их
    клиентам через SocketIO.
    """
    logger.info("[QueueConsumer] Поток-потребитель для emit'ов запущен.")
    while True:
        try:
            msg = queue_instance.get()
            if msg is None:
                logger.info("[QueueConsumer] Получен сигнал None, завершение работы.")
                break

            event = msg.get('event')
            payload = msg.get('payload', {})
            room = msg.get('room')

            if not event or not room:
                logger.warning(f"[QueueConsumer] Пропуск невалидного сообщения: {msg}")
                continue

            socketio_instance.emit(event, payload, room=room)

        except Exception as e:
            logger.error(f"[QueueConsumer] КРИТИЧЕСКАЯ ОШИБКА в потоке-потребителе: {e}", exc_info=True)
            socketio_instance.sleep(1)

def _animation_driver(socketio_instance, app, scheduler, tick):
    """
    Единственный цикл, который двигает конвейер анимации:
    раз в tick секунд выполняет все созревшие шаги планировщика.
    """
    logger.info(f"[AnimationDriver] Цикл планировщика запущен (tick={tick}s).")
    while True:
        socketio_instance.sleep(tick)
        try:
            with app.app_context():
                scheduler.run_pending()
        except Exception as e:
            # Ошибка одного шага не должна останавливать цикл
            logger.error(f"[AnimationDriver] Ошибка при выполнении шага: {e}", exc_info=True)

def start_notification_consumer(socketio_instance, queue_instance):
    """
    Публичная функция для запуска воркера из create_app.
    """
    socketio_instance.start_background_task(
        target=_notification_queue_consumer,
        socketio_instance=socketio_instance,
        queue_instance=queue_instance
    )

def start_animation_driver(socketio_instance, app, scheduler, tick):
    """
    Публичная функция для запуска цикла планировщика из create_app.
    """
    socketio_instance.start_background_task(
        target=_animation_driver,
        socketio_instance=socketio_instance,
        app=app,
        scheduler=scheduler,
        tick=tick
    )
