"""
Logging Configuration
Rotating log files under storage/logs with request data redaction
"""
import logging
import logging.handlers
import json
import re
from typing import Any, Iterable, Optional
from datetime import datetime

REDACTED = '[REDACTED]'


class SensitiveDataFilter(logging.Filter):
    """
    Redact secrets from request data before it reaches a handler

    Hooks log route params and form fields; error records may carry the
    Authorization header. Covers the message text and any dict passed
    through extra={...} (e.g. LogHook's 'params').
    """

    SENSITIVE_KEYS = (
        'password', 'password_confirmation', 'token', 'access_token',
        'api_key', 'secret', '_csrf',
    )

    def __init__(self, keys: Optional[Iterable[str]] = None):
        super().__init__()
        self.keys = {key.lower() for key in (*self.SENSITIVE_KEYS, *(keys or ()))}
        names = '|'.join(re.escape(key) for key in sorted(self.keys))
        self.patterns = [
            # password=..., form or query encoded
            re.compile(rf'((?:^|[?&\s])(?:{names})=)[^&\s]*', re.IGNORECASE),
            # "password": "...", JSON or dict repr
            re.compile(rf'''(["'](?:{names})["']\s*:\s*)(["'])[^"']*\2''', re.IGNORECASE),
            re.compile(r'(Authorization:\s*(?:Bearer|Basic)\s+)\S+', re.IGNORECASE),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Returns:
            True (always pass the record, but with redacted content)
        """
        if isinstance(record.msg, str):
            record.msg = self.redact_text(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(
                self.redact_text(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        for name, value in list(record.__dict__.items()):
            if name.lower() in self.keys:
                setattr(record, name, REDACTED)
            elif isinstance(value, dict):
                setattr(record, name, self.redact_mapping(value))

        return True

    def redact_text(self, text: str) -> str:
        for pattern in self.patterns:
            if pattern.groups == 2:
                text = pattern.sub(rf'\1\2{REDACTED}\2', text)
            else:
                text = pattern.sub(rf'\1{REDACTED}', text)
        return text

    def redact_mapping(self, mapping: dict) -> dict:
        return {
            key: REDACTED if str(key).lower() in self.keys else value
            for key, value in mapping.items()
        }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; fields passed through extra={...} are included"""

    RESERVED_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'taskName', 'message',
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    Centralized logging configuration
    """
    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'json',
        filter_sensitive: bool = True,
        redact: Optional[Iterable[str]] = None,
        file_name: Optional[str] = None
    ) -> logging.Logger:
        """
        Attach a rotating file handler (and a console handler in debug mode)

        Args:
            name: Logger name
            format_type: 'json' or 'text'
            filter_sensitive: Redact secrets from every record
            redact: Extra field names to redact
            file_name: Log file name under storage/logs (defaults to logger name)
        """
        from pyweave.defaults import DEFAULT_LOG_MAX_BYTES, DEFAULT_LOG_BACKUP_COUNT, DEFAULT_APP_ENV
        from pyweave.support import Config, Storage

        app_debug = Config.get('app.DEBUG', False)
        level = LoggerConfig.get_level_by_environment(Config.get('app.ENV', DEFAULT_APP_ENV))

        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG if app_debug else level)
        for old_handler in list(logger.handlers):
            logger.removeHandler(old_handler)
            old_handler.close()

        log_file = Storage.logs(f"{file_name or name}.log")
        Storage.ensure_directory(log_file.parent)

        handlers: list = [logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=Config.get('app.LOG_MAX_BYTES', DEFAULT_LOG_MAX_BYTES),
            backupCount=Config.get('app.LOG_BACKUP_COUNT', DEFAULT_LOG_BACKUP_COUNT),
            encoding='utf-8'
        )]
        if app_debug:
            handlers.append(logging.StreamHandler())

        if format_type == 'json':
            formatter: Any = JSONFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        sensitive_filter = SensitiveDataFilter(redact) if filter_sensitive else None

        for handler in handlers:
            handler.setFormatter(formatter)
            if sensitive_filter:
                handler.addFilter(sensitive_filter)
            logger.addHandler(handler)

        # Handlers sit on this logger only
        logger.propagate = False

        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        levels = {
            'production': logging.WARNING,
            'staging': logging.INFO,
            'development': logging.DEBUG,
            'local': logging.DEBUG,
            'testing': logging.ERROR,
        }
        return levels.get(environment.lower(), logging.INFO)
