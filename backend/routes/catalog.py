"""Catalog listing and direct catalog purchases."""

from fastapi import APIRouter, Depends

from buddy_pocket import wardrobe
from buddy_pocket.engine import BuddyEngine
from buddy_pocket.models import ItemCategory

from .deps import checked, get_engine
from .models import ItemBody

router = APIRouter()


@router.get("/catalog")
async def get_catalog(
    category: ItemCategory | None = None,
    engine: BuddyEngine = Depends(get_engine),
):
    """Items for the pet's gender (optionally one category), with unlock state."""
    pet = engine.get_pet()
    items = engine.catalog.items(category=category, gender=pet.gender)
    return {
        "items": [
            {**item.model_dump(), "unlocked": wardrobe.is_unlocked(pet, item)}
            for item in items
        ],
        "bodies": [
            {**o.model_dump(), "unlocked": wardrobe.is_appearance_unlocked(pet, "body", o)}
            for o in engine.catalog.bodies
        ],
        "colors": [
            {**o.model_dump(), "unlocked": wardrobe.is_appearance_unlocked(pet, "color", o)}
            for o in engine.catalog.colors
        ],
        "eyes": [
            {**o.model_dump(), "unlocked": wardrobe.is_appearance_unlocked(pet, "eye", o)}
            for o in engine.catalog.eyes
        ],
    }


@router.post("/catalog/purchase")
async def purchase(body: ItemBody, engine: BuddyEngine = Depends(get_engine)):
    """Buy a premium item at its catalog price."""
    return checked(engine.purchase_item(body.item_id))
