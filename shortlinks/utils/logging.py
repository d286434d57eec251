"""Structured (JSON) logging for the Lambda functions.

Each Lambda package calls `initialize_logging()` from its `__init__.py`, so the
root logger is configured before the handler module logs anything. One log
line is one JSON object, which CloudWatch Logs Insights can query by field:

    {
        "timestamp": "2025-12-26T12:00:00.000Z",
        "level": "INFO",
        "logger": "shortlinks.lambdas.redirect_url.app",
        "message": "Redirecting client to original URL. Responding with 301.",
        "shortcode": "abc123",
        "event": "REDIRECT_SUCCESS"
    }

Anything passed through `extra=` becomes a top-level field. Values JSON cannot
encode (datetimes, exceptions) are written with str().
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortlinks.constants import ENV


DEFAULT_LOG_LEVEL = 'INFO'

# Chatty at DEBUG (every AppConfig call dumps request/response internals)
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')

# Attributes every LogRecord carries; whatever else is on a record came from `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def log_level() -> str:
    """LOG_LEVEL from the environment, or INFO if it is unset or not a logging level name."""
    level = os.getenv(ENV.App.LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in logging.getLevelNamesMapping() else DEFAULT_LOG_LEVEL


def initialize_logging() -> None:
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {'level': log_level(), 'handlers': ['stdout']},
        }
    )
