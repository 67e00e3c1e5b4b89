# colorful_birds/globals.py

import datetime
import logging
from colorful_birds.services.logging_service import log_event_to_file

logger = logging.getLogger(__name__)


def log_event(event_type, message, game_id=None, extra_data=None):
    """
    Единый журнал игровых событий: пишет строку в EVENTS_LOG_FILE
    и дублирует ее в logger.
    """
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    log_entry = f"[{timestamp}] [TYPE: {event_type}]"

    if game_id:
        log_entry += f" [GameID: {game_id}]"
    if extra_data:
        log_entry += f" [Data: {extra_data}]"

    log_entry += f" | {message}\n"

    logger.info(log_entry.rstrip())
    log_event_to_file(log_entry)
