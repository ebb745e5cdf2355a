# httpjar

Building blocks for an HTTP client:

- an in-memory cookie jar that follows the client rules of RFC 6265;
- a helper that moves cookies between a jar and the headers of a request and
  its response;
- small value types for connection, DNS, redirect and proxy settings;
- a set of default request headers.

The package has no dependencies outside the standard library.

## Installation

```
pip install httpjar
```

## Cookies

`httpjar.cookie.Cookie.parse` reads a `Set-Cookie` header value. It takes a
`str` or `bytes` value and understands these attributes:

- `Expires`, in IMF-fixdate, RFC 850 or asctime form;
- `Max-Age`;
- `Domain`, with leading dots removed and the name lowercased;
- `Path`;
- `Secure`.

It ignores any other attribute. A bad name or value raises `CookieParseError`.

```python
from httpjar.cookie import Cookie
from httpjar.jar import CookieJar

jar = CookieJar()
jar.set(Cookie.parse("session=placeholder; Path=/; Secure"), "https://example.com/login")

for cookie in jar.get_for_uri("https://example.com/account"):
    print(cookie.name, cookie.value)
```

`Cookie.builder` returns a `CookieBuilder` with chainable `domain`, `path`,
`secure` and `expiration` methods. An expiration may be a `datetime` or a Unix
timestamp.

```python
cookie = (
    Cookie.builder("name", "placeholder")
    .domain("example.com")
    .path("/")
    .secure(True)
    .build()
)
```

A cookie compared with a string compares its value, so
`cookie == "placeholder"` is true here. `is_persistent()` tells whether the
cookie has an expiration, and `is_expired()` whether that time has passed.
`is_valid_token` and `is_valid_cookie_value` check names and values on their
own.

### The jar

`httpjar.jar.CookieJar` is safe to share between threads. It keys each cookie
by domain, path and name. A cookie with the same key replaces the old one, and
`set` returns the cookie it replaced. Every `set` also drops expired cookies.

- `get_for_uri(uri)` returns a list of the matching cookies, sorted by name.
  A secure cookie matches only `https` URIs.
- `get_by_name(uri, name)` returns one matching cookie, or `None`.
- `clear()` empties the jar.

`set` raises `CookieRejectedError` when it refuses a cookie. The error has
`kind`, a `CookieRejectedErrorKind`, and `cookie`. The kinds are:

- `INVALID_REQUEST_DOMAIN`: the request URI has no host;
- `DOMAIN_MISMATCH`: the cookie's domain does not domain-match the host;
- `INVALID_COOKIE_DOMAIN`: the cookie's domain has no dot.

The matching rules are exported as `domain_matches`, `path_matches` and
`default_path`.

### Sessions

`httpjar.cookie_session.CookieSession` holds an optional default jar. A jar
passed for one request takes precedence over the default jar.

- `prepare_request(uri, headers, request_jar=None)` returns the header pairs
  with a single `cookie` header. That header keeps any existing `Cookie` value
  first, then adds the jar's cookies as `name=value` joined by `"; "`.
- `process_response(request_uri, headers, request_jar=None, effective_uri=None)`
  stores every valid `Set-Cookie` header in the jar. It uses the effective URI
  when one is given and returns the jar it used. It logs and skips headers that
  are malformed or not ASCII, and it silently skips rejected cookies.

## Settings

Each setting type is a frozen value. Most have a `transport_options()` method
that returns the settings as a plain dict, for the code that opens the
connection.

`httpjar.dial.Dialer` picks where to connect:

- `Dialer.ip_socket(("127.0.0.1", 8080))` or `Dialer.ip_socket("[::1]:8080")`
  connects to an IP socket;
- `Dialer.unix_socket(path)` connects to a Unix socket;
- `Dialer.parse("tcp:127.0.0.1:8080")` and `Dialer.parse("unix:/path/to/my.sock")`
  read a dial URI and raise `DialerParseError` on bad syntax.

`httpjar.dns` holds two types:

- `DnsCache` sets how long DNS entries are cached. The default is 60 seconds.
  Use `DnsCache.disable()`, `DnsCache.forever()` or `DnsCache.timeout(seconds)`.
  `cache_timeout()` returns whole seconds, with 0 for disabled and -1 for
  forever.
- `ResolveMap().add(host, port, addr)` returns a new map that resolves that
  host and port to a fixed IP address.

`httpjar.redirect.RedirectPolicy` sets how redirects are handled. Use
`RedirectPolicy.none()`, which is the default, `RedirectPolicy.follow()` or
`RedirectPolicy.limit(n)`.

`httpjar.proxy` holds two types:

- `Proxy(value)` marks a value as meant for the proxy, not the origin;
- `Blacklist.from_hosts(["a.com", "b.org"])` lists hosts to reach without a
  proxy.

`httpjar.default_headers.DefaultHeaders` holds default headers, which may have
several values each. `apply(headers)` returns the given header pairs plus every
default whose name is missing from them. Names are compared without regard to
case.

## What the package does not do

The package does not send requests and opens no connections. It has no HTTP
client, no request builder and no command-line tool. It has no single object
that gathers every setting, and it has no HTTP version, network interface, IP
version or `Expect: 100-continue` settings. The jar keeps cookies in memory
only, and it does not check domains against the public suffix list.

## Tests

Install the test extra, then run the tests:

```
pip install -e .[test]
pytest
```