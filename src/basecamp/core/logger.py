import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from .config import Config
from .exceptions import LoggerError

LOGGER_NAME = "basecamp"

class Logger:
    """Configures the package-wide ``basecamp`` logger from a Config"""
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, config: Config):
        """Initialize logger with configuration"""
        self.config = config

        if LOGGER_NAME in self._loggers:
            self.logger = self._loggers[LOGGER_NAME]
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
        else:
            self.logger = logging.getLogger(LOGGER_NAME)
            self._loggers[LOGGER_NAME] = self.logger

        self.logger.setLevel(self._get_log_level())

        fmt = self.config.get(
            "logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        self.formatter = logging.Formatter(fmt + " - account:%(account)s - action:%(action)s")

        log_file = self.config.get("logging.file")
        if log_file:
            self.logger.addHandler(self._file_handler(Path(log_file)))

        if self.config.get("logging.console_output", False):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(self.formatter)
            console_handler.addFilter(_ContextFilter())
            self.logger.addHandler(console_handler)

    def _file_handler(self, path: Path) -> logging.Handler:
        """Build a rotating file handler, creating the log directory if needed"""
        try:
            if not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)

            handler = RotatingFileHandler(
                str(path),
                maxBytes=self.config.get("logging.max_size", 1024 * 1024),
                backupCount=self.config.get("logging.backup_count", 3)
            )
        except OSError as e:
            raise LoggerError(f"Failed to setup log file {path}: {str(e)}")
        handler.setFormatter(self.formatter)
        handler.addFilter(_ContextFilter())
        return handler

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

    def _prepare_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        extra_context = {
            'account': '-',
            'action': '-'
        }
        if extra:
            extra_context.update(extra)
        return extra_context

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, extra=self._prepare_extra(kwargs.get('extra')))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, extra=self._prepare_extra(kwargs.get('extra')))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, extra=self._prepare_extra(kwargs.get('extra')))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, extra=self._prepare_extra(kwargs.get('extra')))

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message"""
        self.logger.critical(message, extra=self._prepare_extra(kwargs.get('extra')))

class _ContextFilter(logging.Filter):
    """Fills in account/action for records emitted by the library modules"""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in ('account', 'action'):
            if not hasattr(record, name):
                setattr(record, name, '-')
        return True
