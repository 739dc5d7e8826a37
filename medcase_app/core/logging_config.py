"""
Logging setup for the ``medcase`` logger tree.

Engine and service modules log through ``get_logger('medcase.<area>')``.
``setup_logging`` gives that tree a console handler and a size-rotated file
under ``log_dir``, either as plain text or one JSON object per line.
"""

import json
import logging
import logging.handlers
import os
from typing import Optional

LOGGER_NAME = 'medcase'
LOG_FILE = 'medcase.log'
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': self.formatTime(record, DATE_FORMAT),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLineFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(app=None, log_level: str = 'INFO', log_dir: Optional[str] = None,
                  json_format: bool = False) -> logging.Logger:
    """
    Attach console and rotating-file handlers to the ``medcase`` logger.

    Args:
        app: Flask app; when given, its logger also writes to the file.
        log_level: Level name such as ``"INFO"``.
        log_dir: Folder for ``medcase.log``; ``logs/`` at the project root if None.
        json_format: Write JSON lines instead of plain text.

    Returns:
        The configured ``medcase`` logger.
    """
    if log_dir is None:
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        log_dir = os.path.join(project_root, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = _formatter(json_format)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    log_path = os.path.join(log_dir, LOG_FILE)
    rotating = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding='utf-8'
    )
    rotating.setFormatter(formatter)
    logger.addHandler(rotating)
    logger.propagate = False

    if app is not None:
        app.logger.addHandler(rotating)
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info("Logging to %s at level %s", log_path, logging.getLevelName(level))
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
