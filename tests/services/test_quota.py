"""Tests for quota arithmetic."""

import pytest

from org_hierarchy.services.quota import UNLIMITED, check_limit, within_limit


@pytest.mark.parametrize(
    "limit,current,expected",
    [
        (UNLIMITED, 10_000, True),
        (0, 0, False),
        (5, 4, True),
        (5, 5, False),
        (5, 6, False),
    ],
)
def test_within_limit(limit, current, expected):
    assert within_limit(limit, current) is expected


def test_uncounted_limit_type_passes():
    assert check_limit({"users": 0}, "users", None) is True


def test_absent_limit_is_unlimited():
    assert check_limit({}, "brands", 99) is True
    assert check_limit(None, "brands", 99) is True
