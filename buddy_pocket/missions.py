"""Daily missions: a fixed four-mission board rebuilt each calendar day."""

from __future__ import annotations

import logging
from datetime import date

from buddy_pocket.errors import UnknownItem
from buddy_pocket.models import DailyMission, MissionBoard, PetState

logger = logging.getLogger(__name__)

FEED_MISSION = "daily_feed"
GAME_MISSION = "daily_game"
SOCIAL_MISSION = "daily_social"
META_MISSION = "daily_all"


def daily_mission_set() -> list[DailyMission]:
    return [
        DailyMission(id=FEED_MISSION, description="Nourris ton Buddy 3 fois", emoji="🍖",
                     target=3, reward_gems=1, reward_coins=10),
        DailyMission(id=GAME_MISSION, description="Joue à 2 mini-jeux", emoji="🎮",
                     target=2, reward_gems=1, reward_coins=15),
        DailyMission(id=SOCIAL_MISSION, description="Envoie un message", emoji="💬",
                     target=1, reward_gems=1, reward_coins=5),
        DailyMission(id=META_MISSION, description="Complète toutes les missions", emoji="🏆",
                     target=1, reward_gems=2, reward_coins=25),
    ]


def roll_over(board: MissionBoard | None, today: date) -> MissionBoard:
    if board is not None and board.day == today:
        return board
    logger.info("daily missions reset day=%s", today)
    return MissionBoard(day=today, missions=daily_mission_set())


def _grant(mission: DailyMission, pet: PetState) -> None:
    mission.rewarded = True
    pet.gems += mission.reward_gems
    pet.coins += mission.reward_coins
    logger.debug("mission rewarded id=%s gems=%d coins=%d",
                 mission.id, mission.reward_gems, mission.reward_coins)


def increment_progress(board: MissionBoard, mission_id: str, pet: PetState) -> list[DailyMission]:
    """Advance one mission and pay any mission completed by this step.

    Rewards are paid at most once per mission per day. When every regular
    mission is done the meta mission completes and pays too. Returns the
    missions rewarded by this call.
    """
    mission = next((m for m in board.missions if m.id == mission_id), None)
    if mission is None or mission_id == META_MISSION:
        raise UnknownItem(f"No incrementable mission {mission_id}")

    mission.progress += 1
    rewarded: list[DailyMission] = []
    if mission.completed and not mission.rewarded:
        _grant(mission, pet)
        rewarded.append(mission)

    regular = [m for m in board.missions if m.id != META_MISSION]
    meta = next((m for m in board.missions if m.id == META_MISSION), None)
    if meta is not None and not meta.rewarded and all(m.completed for m in regular):
        meta.progress = meta.target
        _grant(meta, pet)
        rewarded.append(meta)
    return rewarded
