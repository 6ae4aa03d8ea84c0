"""Logging setup for the command line tools.

Every CLI invocation runs inside a :class:`RunContext`, so all lines logged
while detecting, reading or capturing one image share a short run ID. The ID
is kept in a context variable and stamped onto records by
:class:`RunIDFilter`.
"""
import json
import logging
import logging.handlers
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from .constants import APP_NAME

_run_id: ContextVar[Optional[str]] = ContextVar('run_id', default=None)

# LogRecord attributes that are not user supplied ``extra=`` values
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {
    'message', 'asctime', 'run_id',
}

QUIET_LOGGERS = ('PIL', 'pytesseract')


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def current_run_id() -> Optional[str]:
    return _run_id.get()


class RunIDFilter(logging.Filter):
    """Attach the current run ID (or ``-``) to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id.get() or '-'
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'run_id': getattr(record, 'run_id', '-'),
            'message': record.getMessage(),
            'where': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry['error'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }
        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extra:
            entry['extra'] = extra
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``time - logger - LEVEL - [run] - message``"""

    def __init__(self, show_run_id: bool = True):
        fmt = '%(asctime)s - %(name)s - %(levelname)s'
        if show_run_id:
            fmt += ' - [%(run_id)s]'
        super().__init__(fmt + ' - %(message)s')


class LoggingManager:
    """Installs and removes the application's root logger handlers."""

    def __init__(self):
        self._handlers: Dict[str, logging.Handler] = {}
        self._configured = False
        self.log_dir: Optional[Path] = None

    @property
    def is_configured(self) -> bool:
        return self._configured

    def configure(
        self,
        log_level: str = 'INFO',
        log_dir: Optional[Union[str, Path]] = None,
        enable_file_logging: bool = False,
        enable_console_logging: bool = True,
        structured_logging: bool = False,
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        application_name: str = APP_NAME,
    ) -> None:
        """Replace the root logger's handlers.

        Args:
            log_level: Level name; unknown names fall back to INFO.
            log_dir: Where the rotating log files go (``logs`` if omitted).
            enable_file_logging: Write ``<name>.log`` and ``<name>-errors.log``.
            enable_console_logging: Log to stderr. Stdout carries command output.
            structured_logging: JSON lines instead of the console format.
            max_file_size: Rotation size in bytes.
            backup_count: Rotated files kept per log.
            application_name: Base name of the log files.

        Calling this again is a no-op until :meth:`shutdown`.
        """
        if self._configured:
            return

        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            level = logging.INFO
        formatter = JSONFormatter() if structured_logging else ConsoleFormatter()

        root = logging.getLogger()
        root.setLevel(level)
        root.handlers.clear()

        if enable_console_logging:
            self._install('console', logging.StreamHandler(sys.stderr), level, formatter)

        if enable_file_logging:
            self.log_dir = Path(log_dir or 'logs')
            self.log_dir.mkdir(parents=True, exist_ok=True)
            for key, suffix, handler_level in (('file', '', level),
                                               ('errors', '-errors', logging.ERROR)):
                handler = logging.handlers.RotatingFileHandler(
                    self.log_dir / f'{application_name}{suffix}.log',
                    maxBytes=max_file_size, backupCount=backup_count, encoding='utf-8',
                )
                self._install(key, handler, handler_level, formatter)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        self._configured = True
        logging.getLogger(__name__).debug(
            f"Logging at {logging.getLevelName(level)}, handlers: {', '.join(self._handlers) or 'none'}"
        )

    def _install(self, key: str, handler: logging.Handler, level: int,
                 formatter: logging.Formatter) -> None:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RunIDFilter())
        logging.getLogger().addHandler(handler)
        self._handlers[key] = handler

    def shutdown(self) -> None:
        """Detach and close everything :meth:`configure` installed."""
        root = logging.getLogger()
        while self._handlers:
            _, handler = self._handlers.popitem()
            root.removeHandler(handler)
            handler.close()
        self._configured = False


logging_manager = LoggingManager()


def setup_logging(config) -> None:
    """Configure logging from a :class:`~ocr_viewer.config.settings.Config`."""
    logging_manager.configure(
        log_level=config.log_level,
        log_dir=config.log_dir,
        enable_file_logging=config.enable_file_logging,
        structured_logging=config.structured_logging,
    )


class RunContext:
    """Tag log records with a run ID for the duration of a ``with`` block.

    Nested contexts restore the outer ID on exit.
    """

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id or new_run_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = _run_id.set(self.run_id)
        return self.run_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _run_id.reset(self._token)
