"""Fixed-window seasonal events, recurring every calendar year."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class SeasonalEvent(BaseModel):
    id: str
    name: str
    emoji: str
    start: tuple[int, int]  # (month, day), inclusive
    end: tuple[int, int]    # (month, day), inclusive
    bonus_gems: int

    def window(self, year: int) -> tuple[date, date]:
        return date(year, *self.start), date(year, *self.end)

    def is_active(self, today: date) -> bool:
        start, end = self.window(today.year)
        return start <= today <= end

    def days_remaining(self, today: date) -> int:
        _, end = self.window(today.year)
        return max(0, (end - today).days)


SEASONAL_EVENTS: list[SeasonalEvent] = [
    SeasonalEvent(id="halloween", name="Halloween", emoji="🎃", start=(10, 20), end=(11, 3), bonus_gems=50),
    SeasonalEvent(id="noel", name="Noël", emoji="🎄", start=(12, 15), end=(12, 29), bonus_gems=50),
    SeasonalEvent(id="ramadan", name="Ramadan", emoji="🌙", start=(2, 28), end=(3, 14), bonus_gems=50),
    SeasonalEvent(id="valentine", name="Saint-Valentin", emoji="❤️", start=(2, 7), end=(2, 21), bonus_gems=30),
    SeasonalEvent(id="summer", name="Été", emoji="☀️", start=(6, 21), end=(7, 5), bonus_gems=40),
    SeasonalEvent(id="backtoschool", name="Rentrée", emoji="📚", start=(9, 1), end=(9, 15), bonus_gems=30),
]


def active_events(today: date) -> list[SeasonalEvent]:
    return [e for e in SEASONAL_EVENTS if e.is_active(today)]
