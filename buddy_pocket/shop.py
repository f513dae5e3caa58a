"""Weekly shop rotation, recent-purchase history and flash sales.

The weekly slate is rebuilt only when the ISO week changes; within a week
the stored slate is reused as-is, restarts included. Randomness comes from
the caller's `random.Random` so a seeded generator reproduces a slate.

Slate shape (before truncation to SLOT_COUNT):

    top ∪ costume          → up to 2
    head_accessory         → up to 2
    room_theme ∪ special   → up to 1
    anything left          → 1 mystery slot
    then random backfill from the unused pool until SLOT_COUNT
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta

from buddy_pocket import wardrobe
from buddy_pocket.errors import AlreadyOwned, InvalidStateTransition, UnknownItem
from buddy_pocket.models import (
    CatalogItem,
    FlashSale,
    PetState,
    ShopSlot,
    ShopState,
    WeeklyShop,
)

logger = logging.getLogger(__name__)

SLOT_COUNT = 6
FREE_SLOT_STREAK = 5

RECENT_PURCHASES_MAX = 50
RECENT_PURCHASES_KEEP = 30

FLASH_SALE_DISCOUNT = (30, 50)
FLASH_SALE_MINUTES = (60, 120)

_BUCKETS: tuple[tuple[frozenset[str], int], ...] = (
    (frozenset({"top", "costume"}), 2),
    (frozenset({"head_accessory"}), 2),
    (frozenset({"room_theme", "special"}), 1),
)


def iso_week_id(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def next_reset(now: datetime) -> datetime:
    """Midnight of the next Monday strictly after `now`."""
    days_ahead = 7 - now.weekday()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=days_ahead)


def final_price(price: int, discount: int | None) -> int:
    if discount is None:
        return price
    return max(1, price - price * discount // 100)


def slot_price(slot: ShopSlot) -> int:
    return final_price(slot.item.price, slot.discount)


def generate_weekly_shop(
    pool: list[CatalogItem],
    week_id: str,
    exclude: list[str],
    rng: random.Random,
    now: datetime,
) -> WeeklyShop:
    """Build a fresh slate from the premium pool minus excluded ids."""
    excluded = set(exclude)
    available = [i for i in pool if i.id not in excluded]
    shuffled = list(available)
    rng.shuffle(shuffled)

    chosen: list[CatalogItem] = []
    for categories, take in _BUCKETS:
        chosen.extend([i for i in shuffled if i.category in categories][:take])
    chosen.extend([i for i in shuffled if i not in chosen][:1])
    chosen = chosen[:SLOT_COUNT]

    leftovers = [i for i in available if i not in chosen]
    while len(chosen) < SLOT_COUNT and leftovers:
        chosen.append(leftovers.pop(rng.randrange(len(leftovers))))

    slots = [ShopSlot(item=item) for item in chosen]
    shop = WeeklyShop(
        week_id=week_id,
        slots=slots,
        free_item_id=slots[0].item.id if slots else None,
        resets_at=next_reset(now),
    )
    logger.info("weekly shop generated week=%s slots=%d pool=%d", week_id, len(slots), len(available))
    return shop


def ensure_weekly_shop(
    state: ShopState,
    pool: list[CatalogItem],
    rng: random.Random,
    now: datetime,
) -> bool:
    """Regenerate the slate if its week id is stale. True when it rotated."""
    week_id = iso_week_id(now.date())
    if state.weekly is not None and state.weekly.week_id == week_id:
        return False
    state.weekly = generate_weekly_shop(pool, week_id, state.recent_purchase_ids, rng, now)
    return True


def remember_purchase(state: ShopState, item_id: str) -> None:
    state.recent_purchase_ids.append(item_id)
    if len(state.recent_purchase_ids) > RECENT_PURCHASES_MAX:
        state.recent_purchase_ids = state.recent_purchase_ids[-RECENT_PURCHASES_KEEP:]


def is_free(shop: WeeklyShop, slot: ShopSlot, pet: PetState) -> bool:
    return shop.free_item_id == slot.item.id and pet.streak_days >= FREE_SLOT_STREAK


def purchase_slot(state: ShopState, item_id: str, pet: PetState) -> int:
    """Buy one slot of this week's slate. Returns the gems spent."""
    if state.weekly is None:
        raise InvalidStateTransition("No weekly shop generated")
    slot = next((s for s in state.weekly.slots if s.item.id == item_id), None)
    if slot is None:
        raise UnknownItem(f"{item_id} is not in this week's shop")
    if slot.purchased:
        raise AlreadyOwned(f"{item_id} was already bought this week")

    price = 0 if is_free(state.weekly, slot, pet) else slot_price(slot)
    spent = wardrobe.purchase(pet, slot.item, price=price)
    slot.purchased = True
    remember_purchase(state, item_id)
    return spent


# ---------------------------------------------------------------------------
# Flash sales
# ---------------------------------------------------------------------------

def generate_flash_sale(pool: list[CatalogItem], rng: random.Random, now: datetime) -> FlashSale | None:
    if not pool:
        return None
    item = rng.choice(pool)
    sale = FlashSale(
        item=item,
        discount=rng.randint(*FLASH_SALE_DISCOUNT),
        starts_at=now,
        ends_at=now + timedelta(minutes=rng.randint(*FLASH_SALE_MINUTES)),
    )
    logger.info("flash sale started item=%s discount=%d%%", item.id, sale.discount)
    return sale


def ensure_flash_sale(
    state: ShopState, pool: list[CatalogItem], rng: random.Random, now: datetime
) -> bool:
    """Start a new sale once the previous one has ended. True when one started."""
    if state.flash_sale is not None and now <= state.flash_sale.ends_at:
        return False
    state.flash_sale = generate_flash_sale(pool, rng, now)
    return state.flash_sale is not None


def purchase_flash_sale(state: ShopState, pet: PetState, now: datetime) -> int:
    sale = state.flash_sale
    if sale is None or not sale.is_active(now):
        raise InvalidStateTransition("No flash sale is running")
    if sale.purchased:
        raise AlreadyOwned(f"{sale.item.id} flash sale already used")
    spent = wardrobe.purchase(pet, sale.item, price=final_price(sale.item.price, sale.discount))
    sale.purchased = True
    remember_purchase(state, sale.item.id)
    return spent
