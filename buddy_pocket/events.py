"""Outbound engine events and the subscriber fan-out.

The engine publishes one event per observable change after the action
that caused it has been applied. Subscribers are plain callables taking
an Event; presentation and notification code register them through
BuddyEngine.subscribe().
"""

from __future__ import annotations

import logging
from typing import Callable, Literal, Union

from pydantic import BaseModel, Field

from buddy_pocket.models import NeedName

logger = logging.getLogger(__name__)


class LevelUp(BaseModel):
    kind: Literal["level_up"] = "level_up"
    level: int
    levels_gained: int
    unlocked_bodies: list[str] = Field(default_factory=list)


class AchievementUnlocked(BaseModel):
    kind: Literal["achievement_unlocked"] = "achievement_unlocked"
    achievement_id: str
    reward_gems: int


class StreakRewardGranted(BaseModel):
    kind: Literal["streak_reward_granted"] = "streak_reward_granted"
    day: int
    gems: int
    shield_used: bool = False


class CriticalNeedCrossed(BaseModel):
    kind: Literal["critical_need_crossed"] = "critical_need_crossed"
    need: NeedName


class ShopRotated(BaseModel):
    kind: Literal["shop_rotated"] = "shop_rotated"
    week_id: str


class BattlePassLevelUp(BaseModel):
    kind: Literal["battle_pass_level_up"] = "battle_pass_level_up"
    season_id: str
    level: int


Event = Union[
    LevelUp,
    AchievementUnlocked,
    StreakRewardGranted,
    CriticalNeedCrossed,
    ShopRotated,
    BattlePassLevelUp,
]

Subscriber = Callable[[Event], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber. Returns a function that removes it again."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: Event) -> None:
        logger.debug("event %s", event.kind)
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                # the action is already applied; a failing observer is only logged
                logger.exception("event subscriber failed kind=%s", event.kind)
