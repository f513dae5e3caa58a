"""Currency grants after verified store purchases, and debug actions."""

from fastapi import APIRouter, Depends

from buddy_pocket.engine import BuddyEngine

from .deps import checked, get_engine
from .models import DevCodeBody, GrantBody, ProductBody

router = APIRouter()


@router.post("/purchases/grant")
async def grant(body: GrantBody, engine: BuddyEngine = Depends(get_engine)):
    """Credit gems for a purchase the store already verified."""
    return checked(engine.grant_currency(body.gems))


@router.post("/purchases/product")
async def grant_product(body: ProductBody, engine: BuddyEngine = Depends(get_engine)):
    """Credit a known store product (gem packs, premium)."""
    return checked(engine.grant_product(body.product_id))


@router.post("/dev/activate")
async def activate_dev(body: DevCodeBody, engine: BuddyEngine = Depends(get_engine)):
    return checked(engine.activate_dev_mode(body.code))


@router.post("/dev/reset")
async def reset(engine: BuddyEngine = Depends(get_engine)):
    """Replace the pet with a fresh default one."""
    return checked(engine.reset_pet())
