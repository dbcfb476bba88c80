"""Unit tests for the process-local user snapshot cache."""

from app.infrastructure.cache import UserCache
from tests.conftest import FakeClock
from tests.factories import make_user


def test_get_missing_returns_none(user_cache: UserCache) -> None:
    assert user_cache.get("nobody") is None
    assert user_cache.is_valid("nobody") is False


def test_set_then_get_reports_age(user_cache: UserCache, fake_clock: FakeClock) -> None:
    user = make_user()
    user_cache.set("p1", user)
    fake_clock.advance(1200)
    entry = user_cache.get("p1")
    assert entry is not None
    assert entry.value == user
    assert entry.age_ms == 1200


def test_valid_strictly_below_ttl(user_cache: UserCache, fake_clock: FakeClock) -> None:
    user_cache.set("p1", make_user())
    fake_clock.advance(4999)
    assert user_cache.is_valid("p1") is True
    fake_clock.advance(1)
    assert user_cache.is_valid("p1") is False


def test_stale_entry_is_still_returned_by_get(
    user_cache: UserCache, fake_clock: FakeClock
) -> None:
    user_cache.set("p1", make_user())
    fake_clock.advance(60_000)
    assert user_cache.get("p1") is not None
    assert user_cache.is_valid("p1") is False


def test_set_overwrites_and_resets_age(user_cache: UserCache, fake_clock: FakeClock) -> None:
    user_cache.set("p1", make_user(name="Old"))
    fake_clock.advance(4000)
    user_cache.set("p1", make_user(name="New"))
    entry = user_cache.get("p1")
    assert entry.value.name == "New"
    assert entry.age_ms == 0
    assert len(user_cache) == 1


def test_invalidate_removes_entry_and_tolerates_missing(user_cache: UserCache) -> None:
    user_cache.set("p1", make_user())
    user_cache.invalidate("p1")
    user_cache.invalidate("p1")
    assert user_cache.get("p1") is None
    assert len(user_cache) == 0


def test_custom_ttl(fake_clock: FakeClock) -> None:
    cache = UserCache(ttl_ms=100, clock=fake_clock)
    cache.set("p1", make_user())
    fake_clock.advance(99)
    assert cache.is_valid("p1")
    fake_clock.advance(1)
    assert not cache.is_valid("p1")
