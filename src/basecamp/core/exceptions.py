from typing import Any, Dict, Optional

class BasecampError(Exception):
    """Base exception class for all basecamp client exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigurationError(BasecampError):
    """Raised when client construction input or a config file is invalid"""
    pass

class LoggerError(BasecampError):
    """Raised when there is a logging error"""
    pass

class TransportError(BasecampError):
    """Raised when the connection fails or the request times out"""
    def __init__(self, message: str, url: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.url = url

class HTTPError(BasecampError):
    """Raised when the server answers with a 4xx or 5xx status"""
    def __init__(
        self,
        status: int,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        url: Optional[str] = None
    ):
        super().__init__(
            f"HTTP {status} returned for {url or 'request'}",
            details={"status": status, "headers": headers or {}, "body": body}
        )
        self.status = status
        self.headers = headers or {}
        self.body = body
        self.url = url

class SerializationError(BasecampError):
    """Raised when a response body is not the JSON it was expected to be"""
    pass
