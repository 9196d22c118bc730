"""Tests for opening-hours evaluation."""

from datetime import datetime, timezone
from types import SimpleNamespace

from org_hierarchy.services.schedule import franchise_timezone, is_open, is_open_at

HOURS = {"monday": {"open": "09:00", "close": "17:00", "closed": False}}

# 2024-07-08 is a Monday
MONDAY = datetime(2024, 7, 8)


class TestIsOpenAt:

    def test_bounds_inclusive(self):
        assert is_open_at(HOURS, MONDAY.replace(hour=9, minute=0))
        assert is_open_at(HOURS, MONDAY.replace(hour=17, minute=0))
        assert not is_open_at(HOURS, MONDAY.replace(hour=17, minute=1))
        assert not is_open_at(HOURS, MONDAY.replace(hour=8, minute=59))

    def test_missing_day_is_closed(self):
        assert not is_open_at(HOURS, datetime(2024, 7, 9, 12, 0))

    def test_closed_flag(self):
        hours = {"monday": {"open": "09:00", "close": "17:00", "closed": True}}
        assert not is_open_at(hours, MONDAY.replace(hour=12))

    def test_missing_times_are_closed(self):
        assert not is_open_at({"monday": {"open": "09:00"}}, MONDAY.replace(hour=12))
        assert not is_open_at(None, MONDAY.replace(hour=12))

    def test_no_overnight_wraparound(self):
        hours = {"monday": {"open": "22:00", "close": "02:00"}}
        assert not is_open_at(hours, MONDAY.replace(hour=23))


class TestIsOpen:

    def test_aware_time_converted_to_franchise_zone(self):
        franchise = SimpleNamespace(settings={"timezone": "America/New_York", "operatingHours": HOURS})
        # 13:30 UTC is 09:30 in New York (EDT)
        assert is_open(franchise, datetime(2024, 7, 8, 13, 30, tzinfo=timezone.utc))
        # 12:30 UTC is 08:30 in New York
        assert not is_open(franchise, datetime(2024, 7, 8, 12, 30, tzinfo=timezone.utc))

    def test_naive_time_is_local(self):
        franchise = SimpleNamespace(settings={"timezone": "Asia/Tokyo", "operatingHours": HOURS})
        assert is_open(franchise, MONDAY.replace(hour=10))

    def test_unknown_timezone_falls_back_to_utc(self):
        assert franchise_timezone({"timezone": "Mars/Olympus"}) == timezone.utc
