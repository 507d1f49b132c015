# src/basecamp/api/transaction.py

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
import json
from typing import Any, Dict, List, Optional, Union

import aiohttp

from ..core.utils import redact_headers
from .locator import Locator

class RequestMethod(Enum):
    """HTTP request methods"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def normalize(cls, method: Optional[str]) -> "RequestMethod":
        """Uppercase a verb name, defaulting to GET"""
        if isinstance(method, cls):
            return method
        name = (method or "get").upper()
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None

@dataclass
class APIResponse:
    """Container for API response data"""
    status: int
    data: Any
    headers: Dict[str, str]
    text: str
    timestamp: datetime
    duration: float

    @property
    def ok(self) -> bool:
        return self.status < 400

@dataclass(frozen=True)
class Transaction:
    """
    One outgoing HTTP request.

    Built fresh for every action call. The request fields are frozen; the
    PREPARE hook derives a new Transaction with ``dataclasses.replace``.
    ``response``/``error``/``attempts`` are filled in as the request is
    sent and are kept for introspection by the caller.
    """
    method: RequestMethod
    locator: Locator
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    auth: Optional[aiohttp.BasicAuth] = field(default=None, repr=False)
    history: List[Union[APIResponse, BaseException]] = field(default_factory=list, compare=False, repr=False)

    @property
    def url(self) -> str:
        return self.locator.render()

    @property
    def response(self) -> Optional[APIResponse]:
        """Response of the last attempt, if it got one"""
        if self.history and isinstance(self.history[-1], APIResponse):
            return self.history[-1]
        return None

    @property
    def error(self) -> Optional[BaseException]:
        """Transport error of the last attempt, if it failed without a response"""
        if self.history and isinstance(self.history[-1], BaseException):
            return self.history[-1]
        return None

    @property
    def attempts(self) -> int:
        return len(self.history)

    def with_header(self, name: str, value: str) -> "Transaction":
        headers = dict(self.headers)
        headers[name] = value
        return replace(self, headers=headers, history=[])

    def request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``aiohttp.ClientSession.request``"""
        kwargs: Dict[str, Any] = {
            "params": self.params or None,
            "headers": self.headers,
            "auth": self.auth,
        }
        if self.data is not None:
            kwargs["data"] = self.body
        return kwargs

    @property
    def body(self) -> Optional[bytes]:
        if self.data is None:
            return None
        # bytes are taken as an already encoded JSON document
        if isinstance(self.data, bytes):
            return self.data
        return json.dumps(self.data).encode("utf-8")

def format_request(tx: Transaction) -> str:
    """Printable request dump with credentials removed"""
    url = tx.locator.with_query(tx.params)
    lines = [f"{tx.method.value} {url.render(redact=True)}"]
    lines.extend(f"{k}: {v}" for k, v in redact_headers(tx.headers).items())
    if tx.body is not None:
        lines.append("")
        lines.append(tx.body.decode("utf-8", errors="replace"))
    return "\n".join(lines)

def format_response(response: APIResponse) -> str:
    """Printable response dump"""
    lines = [f"HTTP {response.status} ({response.duration:.3f}s)"]
    lines.extend(f"{k}: {v}" for k, v in redact_headers(response.headers).items())
    if response.text:
        lines.append("")
        lines.append(response.text)
    return "\n".join(lines)
