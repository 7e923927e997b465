"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the server entrypoint before any
other logging is done. uvicorn's own loggers propagate into the root logger
configured here.

Logging format (one JSON object per line on stdout):
{
    "timestamp": "2024-01-15T12:00:00.000Z",
    "level": "INFO",
    "logger": "gurl.operations",
    "message": "Added 2 links.",
    "count": 2
}

Fields passed through `extra` are appended as top-level keys. Values that are
not JSON serializable (bytes keys, addresses) are rendered with str().
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from gurl.constants import ENV, Defaults


# Attributes present on every LogRecord; anything else arrived through `extra`.
RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {
    'asctime',
    'message',
    'taskName',
    'color_message',  # uvicorn
}

# uvicorn loggers follow the application level and reach stdout through root.
UVICORN_LOGGERS = ('uvicorn', 'uvicorn.error', 'uvicorn.access')


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects"""

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
        log.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS and key not in log)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        elif record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging through one JSON handler on stdout.

    Args:
        level (str | None):
            Logging level name. Defaults to $LOG_LEVEL, then INFO.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    # fmt: off
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {'()': JsonFormatter},
        },
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            },
        },
        'loggers': {
            name: {'level': log_level, 'handlers': [], 'propagate': True}
            for name in UVICORN_LOGGERS
        },
        'root': {
            'level': log_level,
            'handlers': ['stdout'],
        },
    })
    # fmt: on
