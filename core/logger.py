"""TelebindLogger — Singleton JSON logger with console and optional rotating file output.

Provides a single, project-wide ``telebind`` logger. SDK modules log through
child loggers (``telebind.client``, ``telebind.form``, …) which propagate
here, so one configuration covers the whole package.

File output is enabled by setting ``TELEBIND_LOG_DIR``; records are then
also written to ``<dir>/telebind.log`` with automatic rotation.
"""

import json
import logging
import os
import re
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "telebind"

_TOKEN_RE = re.compile(r"bot(\d+):[A-Za-z0-9_-]+")


class _JsonFormatter(logging.Formatter):
    """Format every log record as a single-line JSON object.

    Standard fields (timestamp, level, logger, message, module, func_name)
    are always present.  Any *extra* key-value pairs passed via the ``extra``
    parameter of a logging call are merged into the JSON object, giving
    callers an easy way to attach context such as ``api_endpoint``,
    ``command`` or ``field``.

    Example::

        logger.warning(
            "Multipart body rejected",
            extra={"api_endpoint": "sendPhoto", "error": "can not set MIME type"},
        )
    """

    # Keys that belong to the standard LogRecord — everything else is extra.
    _BUILTIN_ATTRS: frozenset[str] = frozenset(vars(logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    ))) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        """Serialize *record* to a JSON string with bot tokens masked."""
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }
        log_entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in self._BUILTIN_ATTRS and key not in log_entry
        )
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return redact_token(json.dumps(log_entry, ensure_ascii=False, default=str))


def redact_token(value: str) -> str:
    """Mask ``bot<id>:<secret>`` path segments, e.g. in ``requests`` error messages."""
    return _TOKEN_RE.sub(r"bot\1:***", value)


class TelebindLogger:
    """Singleton logger with a console handler and an optional rotating file.

    Usage::

        from core.logger import TelebindLogger

        logger = TelebindLogger.get_logger()
        logger.info("Client ready")
    """

    _instance: Optional["TelebindLogger"] = None
    _logger: Optional[logging.Logger] = None

    # Rotation settings
    _LOG_DIR_ENV: str = "TELEBIND_LOG_DIR"
    _LOG_FILE: str = "telebind.log"
    _MAX_BYTES: int = 5 * 1024 * 1024  # 5 MB
    _BACKUP_COUNT: int = 5

    def __new__(cls, level: int = logging.INFO) -> "TelebindLogger":
        """Ensure only one instance is ever created (Singleton)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_logger(level)
        return cls._instance

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_logger(self, level: int) -> None:
        """Create the underlying :class:`logging.Logger` and attach handlers."""
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(level)

        # Avoid duplicate handlers if the module is reloaded.
        if self._logger.handlers:
            return

        formatter = _JsonFormatter()

        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        self._logger.addHandler(stream_handler)

        log_dir = os.environ.get(self._LOG_DIR_ENV)
        if not log_dir:
            return

        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, self._LOG_FILE),
            maxBytes=self._MAX_BYTES,
            backupCount=self._BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def get_logger(level: int = logging.INFO) -> logging.Logger:
        """Return the shared :class:`logging.Logger` instance.

        Creates the singleton on first call; subsequent calls return the
        same logger regardless of the *level* argument.
        """
        instance = TelebindLogger(level)
        assert instance._logger is not None  # guaranteed by __new__
        return instance._logger
