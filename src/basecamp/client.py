# src/basecamp/client.py

"""
Thin client for the Basecamp API.

Requests are built from path segments rather than per-endpoint methods::

    async with Basecamp(account="605816632", username="u", password="p") as bc:
        project = bc.projects(605816632)
        results, transaction = await project.fetch()

Every attribute that is not an action verb or a configuration accessor is a
resource segment: ``bc.projects(605816632).todos()`` addresses
``/605816632/api/v1/projects/605816632/todos.json``, the same as
``bc.resource("projects", 605816632, "todos")``.
"""

from typing import Any, Callable, Iterable, List, Optional, TextIO

import aiohttp

from .api.api_client import APIClient, Transport
from .api.locator import Locator, Segment
from .core.config import ClientConfig, Config

KNOWN_RESOURCES = (
    "accesses",
    "attachments",
    "calendar_events",
    "calendars",
    "comments",
    "documents",
    "events",
    "groups",
    "messages",
    "people",
    "project_templates",
    "projects",
    "stars",
    "todo_lists",
    "todos",
    "topics",
    "uploads",
)

class Basecamp(APIClient):
    """Client bound to one Basecamp resource locator"""

    def __init__(
        self,
        account: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        locator: Optional[Locator] = None,
        transport: Optional[Transport] = None,
        session: Optional[aiohttp.ClientSession] = None,
        debug_stream: Optional[TextIO] = None,
        **options: Any
    ):
        if config is None:
            config = ClientConfig(
                account=account,
                username=username,
                password=password,
                **options
            )
        super().__init__(
            config,
            locator=locator,
            transport=transport,
            session=session,
            debug_stream=debug_stream
        )

    @classmethod
    def from_config(cls, settings: Config, **overrides: Any) -> "Basecamp":
        """Build a root client from layered settings"""
        return cls(config=settings.client_config(**overrides))

    @classmethod
    def build_locator(cls, config: ClientConfig) -> Locator:
        return super().build_locator(config).with_path(config.base_segments)

    def resource(self, *segments: Segment) -> "Basecamp":
        """Return a new client for this resource extended by ``segments``"""
        return type(self)(
            config=self._config,
            locator=self._locator.append(*segments),
            transport=self._transport
        )

    def __getattr__(self, name: str) -> Callable[..., "Basecamp"]:
        if name.startswith("_"):
            raise AttributeError(name)

        def accessor(*segments: Segment) -> "Basecamp":
            return self.resource(name, *segments)

        accessor.__name__ = name
        return accessor

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(KNOWN_RESOURCES))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.url}>"

    @property
    def account(self) -> str:
        return self._config.account

    @property
    def username(self) -> str:
        return self._config.username

    @property
    def password(self) -> str:
        return self._config.password

    @property
    def identifier(self) -> str:
        return self._config.identifier

    @property
    def version(self) -> int:
        return self._config.version

    @property
    def debug(self) -> bool:
        return self._config.debug

    @property
    def fatal(self) -> bool:
        return self._config.fatal

    @property
    def retries(self) -> int:
        return self._config.retries

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def segments(self) -> List[str]:
        """Resource segments below the account/version base path"""
        base = len(self._config.base_segments)
        return list(self._locator.segments[base:])
