"""Equip/unequip and room decor placement."""

from fastapi import APIRouter, Depends

from buddy_pocket.engine import BuddyEngine

from .deps import checked, get_engine
from .models import ItemBody, MoveDecorBody, PlaceDecorBody, UnequipBody

router = APIRouter()


@router.post("/wardrobe/equip")
async def equip(body: ItemBody, engine: BuddyEngine = Depends(get_engine)):
    return checked(engine.equip(body.item_id))


@router.post("/wardrobe/unequip")
async def unequip(body: UnequipBody, engine: BuddyEngine = Depends(get_engine)):
    return checked(engine.unequip(body.category))


# ── Decor ────────────────────────────────────────────────


@router.get("/wardrobe/decor")
async def list_decor(engine: BuddyEngine = Depends(get_engine)):
    """Decor placed in the room."""
    return engine.get_pet().decor_items


@router.post("/wardrobe/decor", status_code=201)
async def place_decor(body: PlaceDecorBody, engine: BuddyEngine = Depends(get_engine)):
    """Place an unlocked decor item; `ref` in the result is the placement id."""
    return checked(engine.place_decor(body.decor_id, body.x, body.y, body.is_wall))


@router.patch("/wardrobe/decor/{placement_id}")
async def move_decor(placement_id: str, body: MoveDecorBody, engine: BuddyEngine = Depends(get_engine)):
    return checked(engine.move_decor(placement_id, body.x, body.y))


@router.delete("/wardrobe/decor/{placement_id}")
async def remove_decor(placement_id: str, engine: BuddyEngine = Depends(get_engine)):
    return checked(engine.remove_decor(placement_id))
