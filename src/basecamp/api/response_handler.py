# src/basecamp/api/response_handler.py

from enum import Enum
from typing import Any, Optional, Union
import json
import logging

from ..core.exceptions import HTTPError, SerializationError, TransportError
from .transaction import APIResponse

logger = logging.getLogger(__name__)

class Outcome(Enum):
    """Result of one attempt"""
    SUCCESS = "success"
    FAILURE = "failure"

class ResponseHandler:
    """
    Classifies responses and decodes their bodies.

    This class provides:
    - Status classification (2xx/3xx succeed, 4xx/5xx fail)
    - JSON body decoding
    - Construction of the exceptions raised in fatal mode
    """

    def classify(self, status: int) -> Outcome:
        """Map an HTTP status code to an outcome"""
        if status >= 400:
            return Outcome.FAILURE
        return Outcome.SUCCESS

    def decode(self, body: Optional[Union[bytes, str]], expect_json: bool = True) -> Any:
        """
        Decode a response body

        Args:
            body: Raw response body
            expect_json: Whether an undecodable body is an error

        Returns:
            Decoded JSON value, ``None`` for an empty body, or the raw text
            when the body is not JSON and JSON was not expected
        """
        if isinstance(body, bytes):
            try:
                text = body.decode("utf-8")
            except UnicodeDecodeError as e:
                if expect_json:
                    raise SerializationError(
                        f"Response body is not valid UTF-8: {str(e)}",
                        details={"body": body[:200]}
                    ) from e
                text = body.decode("utf-8", errors="replace")
        else:
            text = body

        if text is None or not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            if expect_json:
                raise SerializationError(
                    f"Response body is not valid JSON: {str(e)}",
                    details={"body": text[:200]}
                ) from e
            logger.debug("Non-JSON error body kept as text")
            return text

    def http_error(self, response: APIResponse, url: Optional[str] = None) -> HTTPError:
        """Build the exception raised for a failed response"""
        return HTTPError(
            status=response.status,
            headers=response.headers,
            body=response.data,
            url=url
        )

    def transport_error(self, error: BaseException, url: Optional[str] = None) -> TransportError:
        """Wrap a connection or timeout failure"""
        error_text = str(error) or error.__class__.__name__
        wrapped = TransportError(
            f"Request to {url or 'server'} failed: {error_text}",
            url=url,
            details={"error": error.__class__.__name__}
        )
        wrapped.__cause__ = error
        return wrapped
