# src/basecamp/api/__init__.py

"""
Request construction and dispatch: locators, transactions, retries.
"""

from .api_client import APIClient, Transport
from .locator import Locator
from .response_handler import Outcome, ResponseHandler
from .transaction import APIResponse, RequestMethod, Transaction

__all__ = [
    'APIClient',
    'Transport',
    'Locator',
    'Outcome',
    'ResponseHandler',
    'APIResponse',
    'RequestMethod',
    'Transaction'
]
