# src/basecamp/api/locator.py

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from yarl import URL

from ..core.utils import REDACTED

Segment = Union[str, int]

@dataclass(frozen=True)
class Locator:
    """
    Immutable resource locator.

    Wraps a ``yarl.URL`` holding scheme, host, path, user-info and query.
    Every operation returns a new Locator; the receiver is never modified,
    so locators can be shared freely between derived clients.
    """
    url: URL

    @classmethod
    def from_url(cls, base_url: Union[str, URL]) -> "Locator":
        return cls(URL(base_url))

    @property
    def scheme(self) -> str:
        return self.url.scheme

    @property
    def host(self) -> Optional[str]:
        return self.url.host

    @property
    def path(self) -> str:
        return self.url.path

    @property
    def segments(self) -> Tuple[str, ...]:
        """Path segments without the leading root"""
        return tuple(self.url.parts[1:])

    @property
    def userinfo(self) -> Optional[str]:
        if self.url.user is None:
            return None
        return f"{self.url.user}:{self.url.password or ''}"

    @property
    def credentials(self) -> Optional[Tuple[str, str]]:
        if self.url.user is None:
            return None
        return self.url.user, self.url.password or ""

    @property
    def query(self) -> Dict[str, str]:
        return dict(self.url.query)

    def _replace_path(self, path: str) -> "Locator":
        url = self.url.with_path(path)
        # with_path drops the query string
        if self.url.query_string:
            url = url.with_query(self.url.query)
        return Locator(url)

    def with_path(self, segments: Iterable[Segment]) -> "Locator":
        """Replace the whole path with the given segments"""
        return self._replace_path("/" + "/".join(str(s) for s in segments))

    def with_userinfo(self, username: str, password: str) -> "Locator":
        return Locator(self.url.with_user(username).with_password(password))

    def without_userinfo(self) -> "Locator":
        return Locator(self.url.with_user(None))

    def with_query(self, query: Optional[Mapping[str, Any]]) -> "Locator":
        """Merge query parameters into the locator"""
        if not query:
            return self
        return Locator(self.url.update_query({k: str(v) for k, v in query.items()}))

    def append(self, *segments: Segment) -> "Locator":
        """Return a new Locator with the segments joined onto the path"""
        if not segments:
            return self
        base = "" if self.path == "/" else self.path
        return self._replace_path("/".join([base, *(str(s) for s in segments)]))

    def with_suffix(self, suffix: str) -> "Locator":
        """Append ``suffix`` to the last path segment unless already present"""
        if self.path.endswith(suffix):
            return self
        return self._replace_path(self.path + suffix)

    def render(self, redact: bool = False) -> str:
        """Absolute URL string, optionally with the password masked"""
        url = self.url
        if redact and url.password:
            url = url.with_password(REDACTED)
        return str(url)

    def __str__(self) -> str:
        return self.render(redact=True)

    def __repr__(self) -> str:
        return f"Locator({self.render(redact=True)!r})"
