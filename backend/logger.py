import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from config import settings

EXTRA_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms", "label")


def json_formatter(record: logging.LogRecord) -> str:
    log = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": record.levelname,
        "service": "agri-advisor",
        "message": record.getMessage(),
    }
    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)
    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("agri_advisor")
logger.setLevel(settings.LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
