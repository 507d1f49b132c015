"""
Core configuration, logging and error types shared by the client.
"""

from .config import Config, ClientConfig, DEFAULT_BASE_URL, DEFAULT_IDENTIFIER
from .exceptions import (
    BasecampError,
    ConfigurationError,
    LoggerError,
    TransportError,
    HTTPError,
    SerializationError
)
from .logger import Logger

__all__ = [
    'Config',
    'ClientConfig',
    'DEFAULT_BASE_URL',
    'DEFAULT_IDENTIFIER',
    'BasecampError',
    'ConfigurationError',
    'LoggerError',
    'TransportError',
    'HTTPError',
    'SerializationError',
    'Logger'
]
