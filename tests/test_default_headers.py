from httpjar.default_headers import DefaultHeaders


def test_defaults_added_when_missing():
    defaults = DefaultHeaders([("X-header", "some-value1")])
    assert defaults.apply([]) == [("x-header", "some-value1")]


def test_request_header_overrides_default():
    defaults = DefaultHeaders([("X-header", "some-value1")])
    request = [("X-header", "some-value2")]
    assert defaults.apply(request) == request


def test_multiple_default_values_all_added():
    defaults = DefaultHeaders([("X-header", "some-value1"), ("X-header", "some-value2")])
    assert defaults.apply([]) == [("x-header", "some-value1"), ("x-header", "some-value2")]


def test_request_header_overrides_all_default_values():
    defaults = DefaultHeaders([("X-header", "some-value1"), ("X-header", "some-value2")])
    result = defaults.apply([("x-HEADER", "some-value3")])
    assert result == [("x-HEADER", "some-value3")]


def test_user_agent_override():
    defaults = DefaultHeaders({"user-agent": "foo"})
    result = defaults.apply([("Accept", "*/*")])
    assert result == [("Accept", "*/*"), ("user-agent", "foo")]


def test_apply_does_not_mutate_input():
    defaults = DefaultHeaders({"a": "1"})
    request = [("b", "2")]
    defaults.apply(request)
    assert request == [("b", "2")]


def test_iteration_and_length():
    defaults = DefaultHeaders([("A", "1"), ("B", "2"), ("a", "3")])
    assert len(defaults) == 3
    assert list(defaults) == [("a", "1"), ("a", "3"), ("b", "2")]


def test_empty_defaults_leave_headers_unchanged():
    request = [("Host", "example.com")]
    assert DefaultHeaders().apply(request) == request