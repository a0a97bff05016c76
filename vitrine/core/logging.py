import json
import logging
from datetime import datetime, timezone

from vitrine.config import get_settings

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Libraries whose INFO output drowns the store's own records.
QUIET_LOGGERS = ("sqlalchemy.engine", "multipart", "python_multipart")


class JsonFormatter(logging.Formatter):
    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["error_type"] = record.exc_info[0].__name__
            payload["exc_info"] = self.formatException(record.exc_info)
        # pt-BR messages stay readable in the log stream.
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(settings) -> logging.Formatter:
    if settings.LOG_JSON:
        return JsonFormatter(settings.APP_NAME)
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def setup_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
