"""Tests for core.domain.url."""

import pytest

from core.domain.errors import InvalidURLError
from core.domain.url import WebURL, split_authority

SEARCH_URL = "https://itunes.apple.com/search?media=music&entity=song&term=abba"


class TestWebURLFromString:
    def test_accessors(self):
        url = WebURL.parse(SEARCH_URL)
        assert url is not None
        assert url.absolute_string == SEARCH_URL
        assert url.scheme == "https"
        assert url.host == "itunes.apple.com"
        assert url.path == "/search"
        assert url.query == "media=music&entity=song&term=abba"
        assert url.base_url is None
        assert url.port is None
        assert url.fragment is None

    def test_full_authority(self):
        url = WebURL("https://user:pw@Example.com:8443/a/b/?x=1#frag")
        assert url.user == "user"
        assert url.password == "pw"
        assert url.host == "Example.com"
        assert url.port == 8443
        assert url.path == "/a/b"
        assert url.query == "x=1"
        assert url.fragment == "frag"

    def test_ipv6_host_without_brackets(self):
        url = WebURL("http://[::1]:8080/")
        assert url.host == "::1"
        assert url.port == 8080
        assert url.path == "/"

    def test_path_is_percent_decoded(self):
        assert WebURL("https://example.com/a%20b").path == "/a b"

    def test_no_path(self):
        assert WebURL("https://itunes.apple.com").path == ""

    def test_empty_query_differs_from_missing_query(self):
        assert WebURL("https://example.com/?").query == ""
        assert WebURL("https://example.com/").query is None

    def test_relative_without_base(self):
        url = WebURL("search")
        assert url.scheme is None
        assert url.host is None
        assert url.path == "search"
        assert url.absolute_string == "search"


class TestWebURLRelative:
    def test_relative_to_base(self):
        base = WebURL.parse("https://itunes.apple.com")
        url = WebURL.parse("search", relative_to=base)
        assert url is not None
        assert url.absolute_string == "https://itunes.apple.com/search"
        assert url.relative_string == "search"
        assert url.scheme == "https"
        assert url.host == "itunes.apple.com"
        assert url.path == "/search"
        assert url.query is None
        assert url.base_url == base

    def test_base_as_string(self):
        url = WebURL("search?term=abba", relative_to="https://itunes.apple.com/")
        assert url.absolute_string == "https://itunes.apple.com/search?term=abba"
        assert url.query == "term=abba"

    def test_absolute_string_keeps_base(self):
        url = WebURL("https://other.org/x", relative_to="https://itunes.apple.com")
        assert url.absolute_string == "https://other.org/x"
        assert url.base_url is not None

    def test_absolute_url_drops_base(self):
        url = WebURL("search", relative_to="https://itunes.apple.com")
        absolute = url.absolute_url
        assert absolute.base_url is None
        assert absolute.absolute_string == "https://itunes.apple.com/search"

    def test_failed_base_means_no_base(self):
        url = WebURL.parse("search", relative_to=WebURL.parse("not a url"))
        assert url is not None
        assert url.base_url is None


class TestInvalidURLs:
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "http://exa mple.com",
            "https://example.com/%zz",
            "http://[::1",
            "http://example.com:abc/",
            "http://example.com:70000/",
            "https://example.com/ñ",
        ],
    )
    def test_parse_returns_none(self, value):
        assert WebURL.parse(value) is None

    def test_constructor_raises(self):
        with pytest.raises(InvalidURLError) as excinfo:
            WebURL("http://exa mple.com")
        assert isinstance(excinfo.value, ValueError)
        assert "percent-encoded" in excinfo.value.reason


class TestWebURLValueSemantics:
    def test_equality_and_hash(self):
        a = WebURL("search", relative_to="https://itunes.apple.com")
        b = WebURL("search", relative_to="https://itunes.apple.com")
        assert a == b
        assert hash(a) == hash(b)
        assert a != WebURL("https://itunes.apple.com/search")

    def test_str_is_absolute(self):
        url = WebURL("search", relative_to="https://itunes.apple.com")
        assert str(url) == "https://itunes.apple.com/search"

    def test_snapshot(self):
        snapshot = WebURL("search", relative_to="https://itunes.apple.com").snapshot()
        assert snapshot.absolute_string == "https://itunes.apple.com/search"
        assert snapshot.base_url == "https://itunes.apple.com"
        assert snapshot.query is None


def test_split_authority_empty_port():
    authority = split_authority("example.com:")
    assert authority.host == "example.com"
    assert authority.port is None
