from __future__ import annotations

import threading
from datetime import date, datetime, timezone

import pytest

from tasktracker.services.clock import Clock, FixedClock, to_naive_utc
from tasktracker.services.locks import UserLockRegistry


def test_today_uses_configured_zone() -> None:
    instant = datetime(2024, 3, 14, 23, 30, tzinfo=timezone.utc)
    assert Clock("UTC").today(instant) == date(2024, 3, 14)
    assert Clock("Europe/Berlin").today(instant) == date(2024, 3, 15)
    assert Clock("America/New_York").today(instant) == date(2024, 3, 14)


def test_day_bounds_utc() -> None:
    start, end = Clock("UTC").day_bounds(date(2024, 3, 14))
    assert start == datetime(2024, 3, 14)
    assert end == datetime(2024, 3, 15)


def test_day_bounds_short_dst_day() -> None:
    # Berlin springs forward on 2024-03-31: the local day lasts 23 hours.
    start, end = Clock("Europe/Berlin").day_bounds(date(2024, 3, 31))
    assert start == datetime(2024, 3, 30, 23, 0)
    assert end == datetime(2024, 3, 31, 22, 0)


def test_unknown_zone_rejected() -> None:
    with pytest.raises(ValueError):
        Clock("Mars/Olympus_Mons")


def test_fixed_clock_advance() -> None:
    clock = FixedClock(datetime(2024, 1, 1, 23, 59, 59))
    assert clock.now().tzinfo is not None
    clock.advance(seconds=1)
    assert clock.today() == date(2024, 1, 2)
    assert to_naive_utc(clock.now()) == datetime(2024, 1, 2, 0, 0, 0)


def test_lock_registry_drops_idle_entries() -> None:
    locks = UserLockRegistry()
    with locks.hold(1):
        assert len(locks) == 1
        with locks.hold(2):
            assert len(locks) == 2
    assert len(locks) == 0


def test_lock_registry_releases_on_error() -> None:
    locks = UserLockRegistry()
    with pytest.raises(RuntimeError):
        with locks.hold(1):
            raise RuntimeError("boom")
    assert len(locks) == 0
    with locks.hold(1):
        pass


def test_different_users_do_not_block() -> None:
    locks = UserLockRegistry()
    entered = threading.Event()

    def other_user() -> None:
        with locks.hold(2):
            entered.set()

    with locks.hold(1):
        t = threading.Thread(target=other_user)
        t.start()
        assert entered.wait(timeout=5)
        t.join(timeout=5)


def test_same_user_is_serialized() -> None:
    locks = UserLockRegistry()
    entered = threading.Event()

    def same_user() -> None:
        with locks.hold(1):
            entered.set()

    with locks.hold(1):
        t = threading.Thread(target=same_user)
        t.start()
        assert not entered.wait(timeout=0.2)
    t.join(timeout=5)
    assert entered.is_set()
    assert len(locks) == 0
