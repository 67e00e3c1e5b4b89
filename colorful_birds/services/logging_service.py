# colorful_birds/services/logging_service.py

import json
import datetime
import logging
import threading
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

file_lock = threading.RLock()

def _append_line(config_key, log_entry):
    """Дописывает строку в файл из app.config. Вне контекста приложения - только в logger."""
    if not has_app_context():
        logger.debug(f"[{config_key}] (no app context) {log_entry.rstrip()}")
        return

    log_path = current_app.config[config_key]

    with file_lock:
        try:
            with open(log_path, 'a', encoding='utf-8') as f:
                f.write(log_entry)
        except OSError as e:
            logger.error(f"Failed to write to log file {log_path}: {e}")

def log_match_stats(stats_data):
    """Записывает итог партии в лог статистики (одна JSON-строка)."""
    stats_data = dict(stats_data)
    stats_data['timestamp'] = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    _append_line('STATS_LOG_FILE', json.dumps(stats_data, ensure_ascii=False) + '\n')

def log_event_to_file(log_entry):
    """Записывает общее событие в лог событий."""
    _append_line('EVENTS_LOG_FILE', log_entry)
