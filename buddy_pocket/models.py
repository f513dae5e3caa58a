"""Core domain models.

Every engine module and the Storage class operate on these types.
Pydantic is used for validation and serialisation at every data boundary;
each persisted entity is one model dumped to its own JSON blob.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["boy", "girl"]

ItemCategory = Literal[
    "head_accessory",
    "top",
    "bottom",
    "costume",
    "decor",
    "room_theme",
    "food",
    "special",
]

NeedName = Literal["hunger", "happiness", "energy", "hygiene"]

CareAction = Literal["feed", "pet", "sleep", "bathe"]

AppearanceKind = Literal["body", "color", "eye"]

RewardKind = Literal["gems", "coins", "item", "costume", "theme", "exclusive"]


def _new_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Catalog records (immutable, loaded once)
# ---------------------------------------------------------------------------

class CatalogItem(BaseModel):
    """A purchasable or level-gated cosmetic."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    emoji: str = ""
    category: ItemCategory
    gender: Gender | None = None  # None = unisex
    premium: bool = False
    price: int = 0  # gems
    required_level: int = 1

    @property
    def unisex(self) -> bool:
        return self.gender is None


class AppearanceOption(BaseModel):
    """A body type, color or eye type."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    emoji: str = ""
    premium: bool = False
    price: int = 0
    unlock_level: int | None = None  # set on secret bodies only

    @property
    def secret(self) -> bool:
        return self.unlock_level is not None


# ---------------------------------------------------------------------------
# Pet aggregate
# ---------------------------------------------------------------------------

class Needs(BaseModel):
    """Four wellbeing values, each in [0, 1]."""

    hunger: float = Field(default=1.0, ge=0.0, le=1.0)
    happiness: float = Field(default=1.0, ge=0.0, le=1.0)
    energy: float = Field(default=1.0, ge=0.0, le=1.0)
    hygiene: float = Field(default=1.0, ge=0.0, le=1.0)

    def average(self) -> float:
        return (self.hunger + self.happiness + self.energy + self.hygiene) / 4


class DecorPlacement(BaseModel):
    id: str = Field(default_factory=_new_id)
    decor_id: str
    x: float
    y: float
    is_wall: bool  # False = floor


class UnlockSets(BaseModel):
    """Ids the pet owns, per category. Membership only ever grows."""

    bodies: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    eyes: list[str] = Field(default_factory=list)
    head_accessories: list[str] = Field(default_factory=list)
    tops: list[str] = Field(default_factory=list)
    bottoms: list[str] = Field(default_factory=list)
    costumes: list[str] = Field(default_factory=list)
    room_themes: list[str] = Field(default_factory=list)
    decor: list[str] = Field(default_factory=list)

    def total(self) -> int:
        return sum(len(ids) for ids in self.model_dump().values())


class LifetimeStats(BaseModel):
    """Counters that feed achievement predicates."""

    feeds: int = 0
    battles_won: int = 0
    games_played: list[str] = Field(default_factory=list)  # distinct game ids
    friends: int = 0
    clans_joined: int = 0


class PetState(BaseModel):
    """The Buddy. Mutated only through engine operations."""

    id: str = Field(default_factory=_new_id)
    name: str = "Mon Buddy"
    gender: Gender = "boy"
    body_type: str = "blob"
    body_color: str = "violet"
    eye_type: str = "normal"

    head_accessory: str | None = None
    top: str | None = None
    bottom: str | None = None
    costume: str | None = None  # excludes top and bottom
    room_theme: str = "theme_default"
    decor_items: list[DecorPlacement] = Field(default_factory=list)

    needs: Needs = Field(default_factory=Needs)
    needs_updated_at: datetime | None = None
    critical_signaled: list[NeedName] = Field(default_factory=list)

    level: int = 1
    xp: int = 0
    coins: int = 100
    gems: int = 10

    streak_days: int = 0
    last_login_day: date | None = None
    has_streak_shield: bool = False

    unlocked: UnlockSets = Field(default_factory=UnlockSets)
    stats: LifetimeStats = Field(default_factory=LifetimeStats)

    dev_mode: bool = False


# ---------------------------------------------------------------------------
# Satellite trackers
# ---------------------------------------------------------------------------

class DailyCapsState(BaseModel):
    """Per-day reward counters. Reset whenever `day` is not today."""

    day: date
    sessions_played: int = 0
    sessions_rewarded: int = 0
    battles_played: int = 0
    battles_rewarded: int = 0
    gems_earned: int = 0


class ShopSlot(BaseModel):
    item: CatalogItem
    discount: int | None = None  # percent
    purchased: bool = False


class WeeklyShop(BaseModel):
    week_id: str  # ISO year-week, e.g. "2026-W09"
    slots: list[ShopSlot] = Field(default_factory=list)
    free_item_id: str | None = None
    resets_at: datetime


class FlashSale(BaseModel):
    item: CatalogItem
    discount: int  # 30–50
    starts_at: datetime
    ends_at: datetime
    purchased: bool = False

    def is_active(self, now: datetime) -> bool:
        return self.starts_at <= now <= self.ends_at


class ShopState(BaseModel):
    """Everything persisted in the shop blob."""

    weekly: WeeklyShop | None = None
    recent_purchase_ids: list[str] = Field(default_factory=list)
    flash_sale: FlashSale | None = None


class BattlePassReward(BaseModel):
    id: str
    level: int
    name: str
    emoji: str = ""
    premium_only: bool = False
    kind: RewardKind
    value: int = 0
    claimed: bool = False


class BattlePassState(BaseModel):
    season_id: str
    name: str
    emoji: str = ""
    starts_at: datetime
    ends_at: datetime
    level: int = 0
    xp: int = 0
    premium: bool = False
    rewards: list[BattlePassReward] = Field(default_factory=list)


class DailyMission(BaseModel):
    id: str
    description: str
    emoji: str = ""
    target: int
    progress: int = 0
    reward_gems: int = 0
    reward_coins: int = 0
    rewarded: bool = False

    @property
    def completed(self) -> bool:
        return self.progress >= self.target


class MissionBoard(BaseModel):
    day: date
    missions: list[DailyMission] = Field(default_factory=list)


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    emoji: str = ""
    reward_gems: int = 0
    unlocked: bool = False


class HighScore(BaseModel):
    game: str
    score: int
    achieved_at: datetime


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------

class WidgetSnapshot(BaseModel):
    """Read-only projection consumed by the out-of-process widget."""

    name: str
    hunger: float
    happiness: float
    energy: float
    hygiene: float
    level: int
    streak: int
    body_type: str
    body_color: str
    eye_type: str
    mood: str


class ProfileSnapshot(BaseModel):
    """What the social backend needs to render this player."""

    id: str
    name: str
    level: int
    body_type: str
    body_color: str
    eye_type: str


class ActionResult(BaseModel):
    """Outcome of one engine action. ok=False carries an error code."""

    ok: bool = True
    error: str | None = None
    message: str | None = None
    gems: int = 0
    coins: int = 0
    xp: int = 0
    levels_gained: int = 0
    ref: str | None = None  # id of whatever the action created
