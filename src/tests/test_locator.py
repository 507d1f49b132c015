"""Test module for resource locators."""
import pytest
from yarl import URL

from basecamp.api.locator import Locator

@pytest.fixture
def root():
    """Fixture for an account root locator with credentials"""
    return (
        Locator.from_url("https://basecamp.com")
        .with_path(["605816632", "api", "v1"])
        .with_userinfo("u", "p")
    )

def test_base_path_and_userinfo(root):
    """Test canonical base path and embedded credentials"""
    assert root.path == "/605816632/api/v1"
    assert root.userinfo == "u:p"
    assert root.credentials == ("u", "p")
    assert root.segments == ("605816632", "api", "v1")
    assert root.scheme == "https"
    assert root.host == "basecamp.com"

def test_append_joins_segments_in_order(root):
    """Test path segments are joined with slashes"""
    derived = root.append("projects", 605816632, "todos")
    assert derived.path == "/605816632/api/v1/projects/605816632/todos"
    assert derived.userinfo == "u:p"

@pytest.mark.parametrize("segments", [
    ("projects",),
    ("projects", "1"),
    ("projects", "1", "todolists", "2", "todos"),
])
def test_append_is_associative(root, segments):
    """Test append(a).append(b) equals append(a, b)"""
    chained = root
    for segment in segments:
        chained = chained.append(segment)
    assert chained == root.append(*segments)
    assert chained.path == root.append(*segments).path

def test_append_does_not_mutate(root):
    """Test derivation leaves the source untouched"""
    before = root.path
    root.append("projects")
    assert root.path == before

def test_append_nothing_returns_same_locator(root):
    """Test appending no segments is a no-op"""
    assert root.append() == root

def test_append_to_bare_host():
    """Test appending onto a locator without a path"""
    locator = Locator.from_url("https://basecamp.com").append("a", "b")
    assert locator.path == "/a/b"

def test_append_keeps_query():
    """Test query parameters survive path changes"""
    locator = Locator.from_url("https://basecamp.com/x").with_query({"page": 2})
    derived = locator.append("y")
    assert derived.path == "/x/y"
    assert derived.query == {"page": "2"}

def test_with_query_without_values_is_noop(root):
    """Test empty query leaves the locator unchanged"""
    assert root.with_query(None) is root
    assert root.with_query({}) is root

def test_suffix_is_idempotent(root):
    """Test .json is appended exactly once"""
    once = root.append("projects").with_suffix(".json")
    twice = once.with_suffix(".json")
    assert once.path == "/605816632/api/v1/projects.json"
    assert twice.path == once.path

def test_render_and_redact(root):
    """Test rendering with and without the password"""
    assert root.render() == "https://u:p@basecamp.com/605816632/api/v1"
    redacted = root.render(redact=True)
    assert ":p@" not in redacted
    assert "***" in redacted or "%2A%2A%2A" in redacted
    assert "u:p" not in repr(root)

def test_without_userinfo(root):
    """Test stripping credentials"""
    stripped = root.without_userinfo()
    assert stripped.userinfo is None
    assert stripped.credentials is None
    assert stripped.render() == "https://basecamp.com/605816632/api/v1"

def test_wraps_yarl_url(root):
    """Test the underlying URL object is exposed"""
    assert isinstance(root.url, URL)
    assert root.url.user == "u"
