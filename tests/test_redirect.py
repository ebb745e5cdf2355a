import pytest

from httpjar.redirect import RedirectKind, RedirectPolicy


def test_default_is_none():
    assert RedirectPolicy() == RedirectPolicy.none()
    assert not RedirectPolicy().follows


def test_follow():
    policy = RedirectPolicy.follow()
    assert policy.kind is RedirectKind.FOLLOW
    assert policy.follows
    assert policy.max_redirects is None


def test_limit_keeps_count():
    policy = RedirectPolicy.limit(5)
    assert policy.kind is RedirectKind.LIMIT
    assert policy.max_redirects == 5
    assert policy.follows


def test_limits_compare_by_count():
    assert RedirectPolicy.limit(8) == RedirectPolicy.limit(8)
    assert RedirectPolicy.limit(8) != RedirectPolicy.limit(5)


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        RedirectPolicy.limit(-1)


def test_count_without_limit_kind_rejected():
    with pytest.raises(ValueError):
        RedirectPolicy(RedirectKind.FOLLOW, 3)