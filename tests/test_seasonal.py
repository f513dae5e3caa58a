from datetime import date

import pytest

from buddy_pocket.seasonal import SEASONAL_EVENTS, active_events


@pytest.mark.parametrize("day,expected", [
    (date(2026, 10, 20), ["halloween"]),
    (date(2026, 11, 3), ["halloween"]),
    (date(2026, 11, 4), []),
    (date(2026, 3, 1), ["ramadan"]),
    (date(2026, 2, 14), ["valentine"]),
    (date(2026, 4, 1), []),
])
def test_active_events(day, expected):
    assert [e.id for e in active_events(day)] == expected


def test_days_remaining():
    halloween = next(e for e in SEASONAL_EVENTS if e.id == "halloween")
    assert halloween.days_remaining(date(2026, 10, 31)) == 3
    assert halloween.days_remaining(date(2026, 11, 3)) == 0
