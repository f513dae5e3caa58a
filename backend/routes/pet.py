"""Pet state, care actions, decay and appearance."""

from fastapi import APIRouter, Depends

from buddy_pocket.engine import BuddyEngine
from buddy_pocket.models import CareAction

from .deps import checked, get_engine
from .models import AdvanceBody, AppearanceBody, SetupBody

router = APIRouter()


@router.get("/pet")
async def get_pet(engine: BuddyEngine = Depends(get_engine)):
    """Current pet aggregate (trackers rolled over first)."""
    return engine.get_pet()


@router.post("/pet/setup")
async def setup_pet(body: SetupBody, engine: BuddyEngine = Depends(get_engine)):
    """Name the pet and choose its clothing line."""
    return checked(engine.setup_pet(body.name, body.gender))


@router.post("/pet/care/{action}")
async def care(action: CareAction, engine: BuddyEngine = Depends(get_engine)):
    """Feed, pet, put to sleep or bathe the pet."""
    return checked(engine.care(action))


@router.post("/pet/advance")
async def advance(body: AdvanceBody, engine: BuddyEngine = Depends(get_engine)):
    """Decay needs by `minutes`, or by wall time since the last tick."""
    if body.minutes is None:
        return checked(engine.tick())
    return checked(engine.advance_needs(body.minutes))


@router.post("/pet/appearance")
async def appearance(body: AppearanceBody, engine: BuddyEngine = Depends(get_engine)):
    """Buy (when `purchase` is set) and/or apply a body, color or eye option."""
    if body.purchase:
        checked(engine.purchase_appearance(body.kind, body.option_id))
    return checked(engine.set_appearance(body.kind, body.option_id))
