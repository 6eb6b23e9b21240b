"""
Logging setup for the job board service.

JSON lines (one object per record) when JSON_LOGS is on, a plain
one-line format otherwise. Everything goes through the root logger;
modules just call logging.getLogger(__name__).
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "job-board-api"

JSON_FORMAT = '%(timestamp)s %(level)s %(logger)s %(module)s %(funcName)s %(message)s'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with time, level, origin and service."""

    def __init__(self, *args, service: str = SERVICE_NAME, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record['timestamp'] = stamp.strftime('%Y-%m-%dT%H:%M:%S.%f') + 'Z'
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['service'] = self.service

        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Point the root logger at stdout, replacing whatever handlers it had.

    Args:
        log_level: Level name, case-insensitive (DEBUG, INFO, WARNING, ...)
        json_logs: JSON lines when True, plain text when False
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_logs:
        formatter = CustomJsonFormatter(JSON_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
