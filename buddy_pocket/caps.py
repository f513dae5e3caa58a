"""Daily reward caps for mini-games and battles.

Two channels share one gem ceiling. A capped call still counts as played;
it just pays nothing. Capping is never an error.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Literal

from pydantic import BaseModel

from buddy_pocket.models import DailyCapsState

logger = logging.getLogger(__name__)

Channel = Literal["game", "battle"]


class CapLimits(BaseModel):
    max_rewarded_sessions: int = 5
    max_rewarded_battles: int = 10
    max_gems_per_day: int = 15


def roll_over(caps: DailyCapsState | None, today: date) -> DailyCapsState:
    """Return today's tracker, starting a fresh one when the stamp is stale."""
    if caps is not None and caps.day == today:
        return caps
    if caps is not None:
        logger.info("daily caps reset previous_day=%s", caps.day)
    return DailyCapsState(day=today)


def remaining_gems(caps: DailyCapsState, limits: CapLimits) -> int:
    return max(0, limits.max_gems_per_day - caps.gems_earned)


def can_earn_gems(caps: DailyCapsState, limits: CapLimits) -> bool:
    return remaining_gems(caps, limits) > 0


def _record(
    caps: DailyCapsState, channel: Channel, requested: int, limits: CapLimits
) -> int:
    if channel == "game":
        caps.sessions_played += 1
        rewarded, cap = caps.sessions_rewarded, limits.max_rewarded_sessions
    else:
        caps.battles_played += 1
        rewarded, cap = caps.battles_rewarded, limits.max_rewarded_battles

    if requested <= 0 or rewarded >= cap or not can_earn_gems(caps, limits):
        logger.debug("%s reward capped requested=%d rewarded=%d", channel, requested, rewarded)
        return 0

    granted = min(requested, remaining_gems(caps, limits))
    if channel == "game":
        caps.sessions_rewarded += 1
    else:
        caps.battles_rewarded += 1
    caps.gems_earned += granted
    return granted


def record_game(caps: DailyCapsState, requested: int, limits: CapLimits | None = None) -> int:
    """Count a finished mini-game. Returns the gems actually granted."""
    return _record(caps, "game", requested, limits or CapLimits())


def record_battle(caps: DailyCapsState, requested: int, limits: CapLimits | None = None) -> int:
    """Count a finished battle. Returns the gems actually granted."""
    return _record(caps, "battle", requested, limits or CapLimits())
