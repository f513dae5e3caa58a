"""Pydantic request models for API endpoints."""

from pydantic import BaseModel

from buddy_pocket.models import AppearanceKind, Gender, ItemCategory


class AdvanceBody(BaseModel):
    minutes: float | None = None  # None = use wall time since the last tick


class SetupBody(BaseModel):
    name: str
    gender: Gender


class AppearanceBody(BaseModel):
    kind: AppearanceKind
    option_id: str
    purchase: bool = False


class GameFinishedBody(BaseModel):
    game: str
    score: int = 0


class BattleFinishedBody(BaseModel):
    won: bool


class BattlePlayBody(BaseModel):
    opponent_id: str


class ItemBody(BaseModel):
    item_id: str


class UnequipBody(BaseModel):
    category: ItemCategory


class PlaceDecorBody(BaseModel):
    decor_id: str
    x: float
    y: float
    is_wall: bool = False


class MoveDecorBody(BaseModel):
    x: float
    y: float


class ClaimBody(BaseModel):
    level: int


class SocialStatusBody(BaseModel):
    friends: int
    in_clan: bool = False


class GrantBody(BaseModel):
    gems: int


class ProductBody(BaseModel):
    product_id: str


class DevCodeBody(BaseModel):
    code: str
