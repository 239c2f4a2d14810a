"""Structured JSON logging for the Lambda handlers

`initialize_logging()` runs once when `clickshortener.lambdas` is imported,
so every handler module logs through the JSON formatter below. CloudWatch
indexes each line as a JSON object, which makes `extra={...}` fields such as
`shortcode` and `event` queryable:

    {"timestamp": "2025-10-15T12:00:00.500Z", "level": "INFO",
     "logger": "clickshortener.core.allocator",
     "message": "Allocated new shortcode.", "shortcode": "aB3xY9", "collisions": 0}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from clickshortener.constants import ENV


# Attributes every LogRecord carries; anything else was passed via `extra=`
_BUILTIN_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, extras and traceback."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _BUILTIN_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Extras may hold datetimes or exceptions
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Send the root logger's output to stdout as JSON

    Args:
        level (str | None):
            Log level name. Defaults to $LOG_LEVEL, then INFO.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {'class': 'logging.StreamHandler', 'formatter': 'json', 'stream': 'ext://sys.stdout'},
        },
        'root': {'level': level, 'handlers': ['stdout']},
    })
