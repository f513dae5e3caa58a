"""Seasonal battle pass: its own XP curve, a 30-level cap and a reward table.

Seasons last two calendar months. When the clock passes a season's end
the next season starts with level, XP and premium reset.
"""

from __future__ import annotations

import logging
from datetime import datetime

from buddy_pocket.errors import RewardAlreadyClaimed, RewardLocked, UnknownItem
from buddy_pocket.models import BattlePassReward, BattlePassState, PetState, RewardKind

logger = logging.getLogger(__name__)

MAX_LEVEL = 30
SEASON_MONTHS = 2
ITEM_REWARD_GEMS = 10

# season number → (name, emoji); later seasons reuse the last entry
SEASON_THEMES: dict[int, tuple[str, str]] = {
    1: ("Cosmos", "🚀"),
}


def xp_required_for_level(level: int) -> int:
    return 200 + level * 50


def add_xp(bp: BattlePassState, amount: int) -> int:
    """Same carry rule as pet XP; overflow at the cap is dropped."""
    if amount <= 0 or bp.level >= MAX_LEVEL:
        return 0
    start = bp.level
    bp.xp += amount
    while bp.level < MAX_LEVEL and bp.xp >= xp_required_for_level(bp.level):
        bp.xp -= xp_required_for_level(bp.level)
        bp.level += 1
    if bp.level >= MAX_LEVEL:
        bp.xp = 0
    return bp.level - start


def _reward_for_level(season: int, level: int) -> BattlePassReward:
    kind: RewardKind
    slot = level % 5
    if slot == 0:
        kind, value, name, emoji = "costume", 0, f"Costume Cosmique Nv{level}", "🚀"
    elif slot == 1:
        kind, value, name, emoji = "gems", level * 2, f"{level * 2} Gemmes", "💎"
    elif slot == 2:
        kind, value, name, emoji = "coins", level * 20, f"{level * 20} Coins", "🪙"
    elif slot == 3:
        kind, value, name, emoji = "item", 0, "Accessoire Étoile", "⭐"
    else:
        kind, value, name, emoji = "theme", 0, "Thème Nébuleuse", "🌌"
    return BattlePassReward(
        id=f"bp_s{season}_{level}",
        level=level,
        name=name,
        emoji=emoji,
        premium_only=level % 3 == 0,
        kind=kind,
        value=value,
    )


def season_rewards(season: int) -> list[BattlePassReward]:
    return [_reward_for_level(season, level) for level in range(1, MAX_LEVEL + 1)]


def _add_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = moment.day
    while True:
        try:
            return moment.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1


def new_season(season: int, now: datetime) -> BattlePassState:
    name, emoji = SEASON_THEMES.get(season, SEASON_THEMES[max(SEASON_THEMES)])
    return BattlePassState(
        season_id=f"season_{season}",
        name=name,
        emoji=emoji,
        starts_at=now,
        ends_at=_add_months(now, SEASON_MONTHS),
        rewards=season_rewards(season),
    )


def season_number(bp: BattlePassState) -> int:
    return int(bp.season_id.rsplit("_", 1)[-1])


def ensure_current_season(bp: BattlePassState | None, now: datetime) -> tuple[BattlePassState, bool]:
    """Return the running season, rolling over an expired one.

    The second value is True when a new season was started.
    """
    if bp is None:
        return new_season(1, now), True
    if now <= bp.ends_at:
        return bp, False
    season = season_number(bp)
    # Skip whole seasons that elapsed while the app was not opened.
    start = bp.ends_at
    while True:
        season += 1
        end = _add_months(start, SEASON_MONTHS)
        if now <= end:
            break
        start = end
    rolled = new_season(season, start)
    logger.info("battle pass rolled over season=%s ends_at=%s", rolled.season_id, rolled.ends_at)
    return rolled, True


def is_active(bp: BattlePassState, now: datetime) -> bool:
    return bp.starts_at <= now <= bp.ends_at


def days_remaining(bp: BattlePassState, now: datetime) -> int:
    return max(0, (bp.ends_at - now).days)


def claim_reward(bp: BattlePassState, level: int, pet: PetState) -> BattlePassReward:
    """Grant the reward at `level`. Raises instead of changing state when gated."""
    reward = next((r for r in bp.rewards if r.level == level), None)
    if reward is None:
        raise UnknownItem(f"No battle pass reward at level {level}")
    if reward.claimed:
        raise RewardAlreadyClaimed(f"Reward {reward.id} already claimed")
    if bp.level < reward.level:
        raise RewardLocked(f"Reward {reward.id} needs pass level {reward.level}")
    if reward.premium_only and not bp.premium:
        raise RewardLocked(f"Reward {reward.id} needs the premium pass")

    if reward.kind == "gems":
        pet.gems += reward.value
    elif reward.kind == "coins":
        pet.coins += reward.value
    else:
        pet.gems += ITEM_REWARD_GEMS
    reward.claimed = True
    logger.debug("battle pass reward claimed id=%s kind=%s", reward.id, reward.kind)
    return reward
