"""
Resource-oriented thin client for the Basecamp API.
"""

from .client import Basecamp, KNOWN_RESOURCES
from .api import APIClient, APIResponse, Locator, RequestMethod, Transaction
from .core import (
    Config,
    ClientConfig,
    Logger,
    BasecampError,
    ConfigurationError,
    TransportError,
    HTTPError,
    SerializationError
)

__version__ = "0.1.0"

__all__ = [
    'Basecamp',
    'KNOWN_RESOURCES',
    'APIClient',
    'APIResponse',
    'Locator',
    'RequestMethod',
    'Transaction',
    'Config',
    'ClientConfig',
    'Logger',
    'BasecampError',
    'ConfigurationError',
    'TransportError',
    'HTTPError',
    'SerializationError'
]
