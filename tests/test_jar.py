from datetime import datetime, timedelta, timezone

import pytest

from httpjar.cookie import Cookie
from httpjar.jar import (
    CookieJar,
    CookieRejectedError,
    CookieRejectedErrorKind,
    default_path,
    domain_matches,
    path_matches,
)


def test_rejected_error_returns_cookie():
    jar = CookieJar()
    cookie = Cookie.parse("foo=bar; domain=com")
    with pytest.raises(CookieRejectedError) as info:
        jar.set(cookie, "https://bar.baz.com")
    assert info.value.cookie is cookie
    assert str(info.value) == "invalid cookie for given request URI"


def test_uri_without_host_is_rejected():
    jar = CookieJar()
    with pytest.raises(CookieRejectedError) as info:
        jar.set(Cookie.parse("foo=bar"), "/just/a/path")
    assert info.value.kind is CookieRejectedErrorKind.INVALID_REQUEST_DOMAIN


def test_expire_a_cookie():
    uri = "https://example.com/foo"
    jar = CookieJar()

    jar.set(Cookie.parse("foo=bar"), uri)
    assert jar.get_by_name(uri, "foo") == "bar"

    jar.set(Cookie.parse("foo=; expires=Wed, 21 Oct 2015 07:28:00 GMT"), uri)
    assert jar.get_for_uri(uri) == []
    assert len(jar) == 0


def test_set_returns_previous_cookie():
    uri = "https://example.com/"
    jar = CookieJar()
    jar.set(Cookie.parse("foo=one"), uri)
    previous = jar.set(Cookie.parse("foo=two"), uri)
    assert previous == "one"
    assert jar.get_by_name(uri, "foo") == "two"


def test_get_for_uri_sorted_by_name():
    uri = "https://example.com/"
    jar = CookieJar()
    jar.set(Cookie.parse("zeta=1"), uri)
    jar.set(Cookie.parse("alpha=2"), uri)
    assert [cookie.name for cookie in jar.get_for_uri(uri)] == ["alpha", "zeta"]


def test_secure_cookie_only_sent_over_https():
    jar = CookieJar()
    jar.set(Cookie.parse("foo=bar; Secure"), "https://example.com/")
    assert jar.get_by_name("http://example.com/", "foo") is None
    assert jar.get_by_name("https://example.com/", "foo") == "bar"


def test_host_only_cookie_not_sent_to_subdomain():
    jar = CookieJar()
    jar.set(Cookie.parse("foo=bar"), "https://example.com/")
    assert jar.get_by_name("https://www.example.com/", "foo") is None


def test_domain_cookie_sent_to_subdomain():
    jar = CookieJar()
    jar.set(Cookie.parse("foo=bar; domain=example.com"), "https://example.com/")
    assert jar.get_by_name("https://www.example.com/", "foo") == "bar"


def test_path_scoping():
    jar = CookieJar()
    jar.set(Cookie.parse("foo=bar"), "https://example.com/docs/page")
    assert jar.get_by_name("https://example.com/docs/other", "foo") == "bar"
    assert jar.get_by_name("https://example.com/other", "foo") is None


def test_clear_removes_everything():
    uri = "https://example.com/"
    jar = CookieJar()
    jar.set(Cookie.parse("foo=bar"), uri)
    jar.clear()
    assert jar.get_for_uri(uri) == []


def test_expired_cookies_are_not_returned():
    uri = "https://example.com/"
    jar = CookieJar()
    past = datetime.now(timezone.utc) - timedelta(seconds=5)
    jar.set(Cookie("old", "x", expiration=past), uri)
    assert jar.get_by_name(uri, "old") is None


@pytest.mark.parametrize(
    "string, domain_string, should_match",
    [
        ("127.0.0.1", "127.0.0.1", True),
        (".127.0.0.2", "127.0.0.2", True),
        ("bar.com", "bar.com", True),
        ("baz.com", "bar.com", False),
        ("baz.bar.com", "bar.com", True),
        ("www.baz.com", "baz.com", True),
        ("baz.bar.com", "com", True),
    ],
)
def test_domain_matches(string, domain_string, should_match):
    assert domain_matches(string, domain_string) is should_match


@pytest.mark.parametrize(
    "request_path, cookie_path, should_match",
    [
        ("/foo", "/foo", True),
        ("/Bar", "/bar", False),
        ("/fo", "/foo", False),
        ("/foo/bar", "/foo", True),
        ("/foo/bar/baz", "/foo", True),
        ("/foo/bar//baz2", "/foo", True),
        ("/foobar", "/foo", False),
        ("/foo", "/foo/bar", False),
        ("/foobar", "/foo/bar", False),
        ("/foo/bar", "/foo/bar", True),
        ("/foo/bar2/", "/foo/bar2", True),
        ("/foo/bar/baz", "/foo/bar", True),
        ("/foo/bar3", "/foo/bar3/", False),
        ("/foo/bar4/", "/foo/bar4/", True),
        ("/foo/bar/baz2", "/foo/bar/", True),
    ],
)
def test_path_matches(request_path, cookie_path, should_match):
    assert path_matches(request_path, cookie_path) is should_match


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("https://example.com", "/"),
        ("https://example.com/", "/"),
        ("https://example.com/foo", "/"),
        ("https://example.com/foo/bar", "/foo"),
        ("https://example.com/a/b/c", "/a/b"),
    ],
)
def test_default_path(uri, expected):
    assert default_path(uri) == expected