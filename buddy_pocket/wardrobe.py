"""Unlock, purchase and equip rules for cosmetics, appearance and decor.

Every function either applies its whole change or raises an EconomyError
before touching the pet, so a rejected purchase never leaves gems
deducted without the unlock (or the reverse).
"""

from __future__ import annotations

import logging

from buddy_pocket.errors import (
    AlreadyOwned,
    InsufficientFunds,
    InvalidStateTransition,
    ItemNotUnlocked,
    UnknownItem,
)
from buddy_pocket.models import (
    AppearanceKind,
    AppearanceOption,
    CatalogItem,
    DecorPlacement,
    ItemCategory,
    PetState,
)

logger = logging.getLogger(__name__)

STREAK_SHIELD_ID = "special_streak_shield"
DEFAULT_ROOM_THEME = "theme_default"

# category → UnlockSets field
UNLOCK_FIELDS: dict[ItemCategory, str] = {
    "head_accessory": "head_accessories",
    "top": "tops",
    "bottom": "bottoms",
    "costume": "costumes",
    "room_theme": "room_themes",
    "decor": "decor",
}

# kind → (UnlockSets field, PetState field)
APPEARANCE_FIELDS: dict[AppearanceKind, tuple[str, str]] = {
    "body": ("bodies", "body_type"),
    "color": ("colors", "body_color"),
    "eye": ("eyes", "eye_type"),
}

EQUIP_SLOTS: dict[ItemCategory, str] = {
    "head_accessory": "head_accessory",
    "top": "top",
    "bottom": "bottom",
    "costume": "costume",
    "room_theme": "room_theme",
}


def _unlock_set(pet: PetState, category: ItemCategory) -> list[str] | None:
    field = UNLOCK_FIELDS.get(category)
    return getattr(pet.unlocked, field) if field else None


def is_unlocked(pet: PetState, item: CatalogItem) -> bool:
    """Dev mode owns everything; basic items gate on level; premium on ownership."""
    if pet.dev_mode:
        return True
    if not item.premium and pet.level >= item.required_level:
        return True
    owned = _unlock_set(pet, item.category)
    return owned is not None and item.id in owned


def is_appearance_unlocked(pet: PetState, kind: AppearanceKind, option: AppearanceOption) -> bool:
    if pet.dev_mode:
        return True
    owned = getattr(pet.unlocked, APPEARANCE_FIELDS[kind][0])
    if option.id in owned:
        return True
    if option.secret:
        return pet.level >= option.unlock_level
    return not option.premium


def _charge(pet: PetState, price: int) -> None:
    if pet.gems < price:
        raise InsufficientFunds(price, pet.gems)
    pet.gems -= price


def unlock(pet: PetState, item: CatalogItem) -> bool:
    """Add an item to its unlock set without charging. False if already there."""
    owned = _unlock_set(pet, item.category)
    if owned is None or item.id in owned:
        return False
    owned.append(item.id)
    return True


def purchase(pet: PetState, item: CatalogItem, price: int | None = None) -> int:
    """Buy a premium item for `price` gems (catalog price by default).

    The streak shield is a consumable: buying it sets the shield flag.
    Returns the gems spent.
    """
    cost = item.price if price is None else price

    if item.id == STREAK_SHIELD_ID:
        if pet.has_streak_shield:
            raise AlreadyOwned("A streak shield is already held")
        _charge(pet, cost)
        pet.has_streak_shield = True
        logger.debug("streak shield bought price=%d", cost)
        return cost

    owned = _unlock_set(pet, item.category)
    if owned is None:
        raise InvalidStateTransition(f"Items of category {item.category} cannot be bought")
    if not item.premium:
        raise InvalidStateTransition(f"{item.id} is unlocked by level, not sold")
    if item.id in owned or pet.dev_mode:
        raise AlreadyOwned(f"{item.id} is already unlocked")

    _charge(pet, cost)
    owned.append(item.id)
    logger.debug("item bought id=%s price=%d gems_left=%d", item.id, cost, pet.gems)
    return cost


def equip(pet: PetState, item: CatalogItem) -> None:
    """Put an unlocked item on. A costume and top/bottom exclude each other."""
    slot = EQUIP_SLOTS.get(item.category)
    if slot is None:
        raise InvalidStateTransition(f"Items of category {item.category} cannot be equipped")
    if not is_unlocked(pet, item):
        raise ItemNotUnlocked(f"{item.id} is locked")

    setattr(pet, slot, item.id)
    if item.category in ("top", "bottom"):
        pet.costume = None
    elif item.category == "costume":
        pet.top = None
        pet.bottom = None


def unequip(pet: PetState, category: ItemCategory) -> None:
    slot = EQUIP_SLOTS.get(category)
    if slot is None:
        raise InvalidStateTransition(f"Nothing to unequip for category {category}")
    if slot == "room_theme":
        pet.room_theme = DEFAULT_ROOM_THEME
    else:
        setattr(pet, slot, None)


# ---------------------------------------------------------------------------
# Appearance
# ---------------------------------------------------------------------------

def set_appearance(pet: PetState, kind: AppearanceKind, option: AppearanceOption) -> None:
    if not is_appearance_unlocked(pet, kind, option):
        raise ItemNotUnlocked(f"{kind} {option.id} is locked")
    setattr(pet, APPEARANCE_FIELDS[kind][1], option.id)


def purchase_appearance(pet: PetState, kind: AppearanceKind, option: AppearanceOption) -> int:
    if not option.premium:
        raise InvalidStateTransition(f"{kind} {option.id} is not sold")
    owned = getattr(pet.unlocked, APPEARANCE_FIELDS[kind][0])
    if option.id in owned or pet.dev_mode:
        raise AlreadyOwned(f"{kind} {option.id} is already unlocked")
    _charge(pet, option.price)
    owned.append(option.id)
    logger.debug("appearance bought kind=%s id=%s price=%d", kind, option.id, option.price)
    return option.price


# ---------------------------------------------------------------------------
# Decor placement
# ---------------------------------------------------------------------------

def _find_placement(pet: PetState, placement_id: str) -> DecorPlacement:
    for placement in pet.decor_items:
        if placement.id == placement_id:
            return placement
    raise UnknownItem(f"No decor placement {placement_id}")


def place_decor(pet: PetState, item: CatalogItem, x: float, y: float, is_wall: bool) -> DecorPlacement:
    if item.category != "decor":
        raise InvalidStateTransition(f"{item.id} is not a decor item")
    if not is_unlocked(pet, item):
        raise ItemNotUnlocked(f"{item.id} is locked")
    placement = DecorPlacement(decor_id=item.id, x=x, y=y, is_wall=is_wall)
    pet.decor_items.append(placement)
    return placement


def move_decor(pet: PetState, placement_id: str, x: float, y: float) -> DecorPlacement:
    placement = _find_placement(pet, placement_id)
    placement.x = x
    placement.y = y
    return placement


def remove_decor(pet: PetState, placement_id: str) -> None:
    placement = _find_placement(pet, placement_id)
    pet.decor_items.remove(placement)
