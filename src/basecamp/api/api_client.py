# src/basecamp/api/api_client.py

from typing import Any, Dict, Optional, TextIO, Tuple
from dataclasses import replace
import asyncio
import logging
import sys
import aiohttp
from datetime import datetime, UTC

from ..core.config import ClientConfig
from .locator import Locator
from .response_handler import Outcome, ResponseHandler
from .transaction import (
    APIResponse,
    RequestMethod,
    Transaction,
    format_request,
    format_response
)

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
JSON_CONTENT_TYPE = "application/json"

class Transport:
    """
    Lazily created aiohttp session shared by a client and all of the
    clients derived from it.

    A session passed in by the caller is used as-is and never closed here.
    """

    def __init__(
        self,
        user_agent: str,
        session: Optional[aiohttp.ClientSession] = None,
        debug_stream: Optional[TextIO] = None
    ):
        self.user_agent = user_agent
        self.debug_stream = debug_stream
        self._session = session
        self._owns_session = session is None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent}
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this transport created it"""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def write_debug(self, text: str) -> None:
        stream = self.debug_stream or sys.stdout
        stream.write(text.rstrip("\n") + "\n\n")
        stream.flush()

class APIClient:
    """
    Executes HTTP verbs against a resource locator.

    This class provides:
    - Transaction building from the locator and client configuration
    - A PREPARE hook applied to every outgoing transaction
    - Retry of transport failures and 4xx/5xx responses
    - Fatal mode, raising instead of returning exhausted failures
    - Debug dumps of requests and responses
    """

    def __init__(
        self,
        config: ClientConfig,
        locator: Optional[Locator] = None,
        transport: Optional[Transport] = None,
        session: Optional[aiohttp.ClientSession] = None,
        debug_stream: Optional[TextIO] = None
    ):
        self._config = config
        self._locator = locator if locator is not None else self.build_locator(config)
        self._transport = transport or Transport(
            config.identifier,
            session=session,
            debug_stream=debug_stream
        )
        self._handler = ResponseHandler()

    @classmethod
    def build_locator(cls, config: ClientConfig) -> Locator:
        """Root locator: base URL with the credentials embedded"""
        return Locator.from_url(config.base_url).with_userinfo(config.username, config.password)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def locator(self) -> Locator:
        return self._locator

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def url(self) -> str:
        """Rendered resource URL, password masked"""
        return self._locator.render(redact=True)

    async def close(self) -> None:
        """Close the API client session"""
        await self._transport.close()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def build_transaction(
        self,
        method: RequestMethod,
        query: Optional[Dict[str, Any]] = None,
        data: Any = None
    ) -> Transaction:
        """Build a fresh transaction for the current locator"""
        credentials = self._locator.credentials
        return Transaction(
            method=method,
            locator=self._locator.without_userinfo(),
            headers={"User-Agent": self._config.identifier},
            params={k: str(v) for k, v in (query or {}).items()},
            data=data,
            auth=aiohttp.BasicAuth(*credentials) if credentials else None
        )

    def prepare(self, transaction: Transaction) -> Transaction:
        """
        Normalise a transaction before it is sent.

        Sets the JSON content type and appends the ``.json`` suffix to the
        path unless it is already there. Runs for every verb; subclasses
        may extend it but must return a new Transaction.
        """
        transaction = transaction.with_header("Content-Type", JSON_CONTENT_TYPE)
        return replace(
            transaction,
            locator=transaction.locator.with_suffix(JSON_SUFFIX),
            history=[]
        )

    async def action(
        self,
        method: Optional[str] = None,
        query: Optional[Dict[str, Any]] = None,
        data: Any = None
    ) -> Tuple[Any, Transaction]:
        """
        Execute a request against this resource

        Args:
            method: HTTP verb, case-insensitive, GET when omitted
            query: Query-string parameters
            data: Request body, sent as JSON

        Returns:
            Tuple of the decoded response body and the transaction
        """
        verb = RequestMethod.normalize(method)
        transaction = self.prepare(self.build_transaction(verb, query=query, data=data))
        return await self._execute(transaction)

    async def fetch(self, **kwargs: Any) -> Tuple[Any, Transaction]:
        """Perform GET request"""
        return await self.action("GET", **kwargs)

    async def create(self, **kwargs: Any) -> Tuple[Any, Transaction]:
        """Perform POST request"""
        return await self.action("POST", **kwargs)

    async def update(self, **kwargs: Any) -> Tuple[Any, Transaction]:
        """Perform PUT request"""
        return await self.action("PUT", **kwargs)

    async def delete(self, **kwargs: Any) -> Tuple[Any, Transaction]:
        """Perform DELETE request"""
        return await self.action("DELETE", **kwargs)

    async def _execute(self, transaction: Transaction) -> Tuple[Any, Transaction]:
        """Send a prepared transaction, retrying failures up to config.retries"""
        url = transaction.locator.render(redact=True)
        remaining = self._config.retries

        while True:
            if self._config.debug:
                self._transport.write_debug(format_request(transaction))
            try:
                response = await self._send(transaction)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                transaction.history.append(e)
                logger.warning(
                    f"{transaction.method.value} {url} failed "
                    f"(attempt {transaction.attempts}): {e!r}"
                )
                if self._config.debug:
                    self._transport.write_debug(f"ERROR {e!r}")
                if remaining > 0:
                    remaining -= 1
                    await self._pause()
                    continue
                if self._config.fatal:
                    raise self._handler.transport_error(e, url)
                return None, transaction

            transaction.history.append(response)
            if self._config.debug:
                self._transport.write_debug(format_response(response))

            if self._handler.classify(response.status) is Outcome.SUCCESS:
                return response.data, transaction

            logger.warning(
                f"{transaction.method.value} {url} returned {response.status} "
                f"(attempt {transaction.attempts})"
            )
            if remaining > 0:
                remaining -= 1
                await self._pause()
                continue
            if self._config.fatal:
                raise self._handler.http_error(response, url)
            return response.data, transaction

    async def _send(self, transaction: Transaction) -> APIResponse:
        """Perform one HTTP round trip"""
        session = await self._transport.get_session()
        logger.debug(f"{transaction.method.value} {transaction.locator.render(redact=True)}")
        start_time = datetime.now(UTC)

        async with session.request(
            transaction.method.value,
            transaction.locator.url,
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            **transaction.request_kwargs()
        ) as response:
            raw = await response.read()
            status = response.status
            headers = dict(response.headers)

        duration = (datetime.now(UTC) - start_time).total_seconds()
        expect_json = (
            self._handler.classify(status) is Outcome.SUCCESS
            and transaction.method is not RequestMethod.HEAD
        )
        return APIResponse(
            status=status,
            data=self._handler.decode(raw, expect_json=expect_json),
            headers=headers,
            text=raw.decode("utf-8", errors="replace"),
            timestamp=datetime.now(UTC),
            duration=duration
        )

    async def _pause(self) -> None:
        if self._config.retry_delay:
            await asyncio.sleep(self._config.retry_delay)
