"""Daily login streak with shield and milestone rewards."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from pydantic import BaseModel

from buddy_pocket.models import PetState

logger = logging.getLogger(__name__)

# (day threshold, gems), ascending by day
STREAK_MILESTONES: tuple[tuple[int, int], ...] = (
    (1, 1),
    (3, 2),
    (7, 5),
    (14, 10),
    (30, 20),
)

SHIELD_THRESHOLD = 5  # streak needed for the free shop slot


class StreakOutcome(BaseModel):
    day: int
    gems: int
    shield_used: bool = False


def streak_reward(day: int) -> int:
    """Gems for the highest milestone at or below `day` (1 if none)."""
    gems = 1
    for threshold, reward in STREAK_MILESTONES:
        if threshold <= day:
            gems = reward
    return gems


def check_streak(pet: PetState, today: date) -> StreakOutcome | None:
    """Process today's login. Returns None when today was already counted.

    A held shield absorbs one gap: the count is kept as it was, neither
    reset nor incremented, and the shield is consumed.
    """
    last = pet.last_login_day
    if last == today:
        return None

    shield_used = False
    if last is None:
        pet.streak_days = 1
    elif last == today - timedelta(days=1):
        pet.streak_days += 1
    elif pet.has_streak_shield:
        pet.has_streak_shield = False
        shield_used = True
        logger.info("streak shield consumed streak=%d gap_from=%s", pet.streak_days, last)
    else:
        logger.info("streak reset previous=%d last_login=%s", pet.streak_days, last)
        pet.streak_days = 1

    pet.last_login_day = today
    gems = streak_reward(pet.streak_days)
    pet.gems += gems
    return StreakOutcome(day=pet.streak_days, gems=gems, shield_used=shield_used)
