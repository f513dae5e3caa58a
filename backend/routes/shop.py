"""Weekly shop and flash sale endpoints."""

from fastapi import APIRouter, Depends

from buddy_pocket import shop
from buddy_pocket.engine import BuddyEngine

from .deps import checked, get_engine
from .models import ItemBody

router = APIRouter()


@router.get("/shop")
async def get_shop(engine: BuddyEngine = Depends(get_engine)):
    """This week's slate with final prices, plus the running flash sale."""
    state = engine.get_shop()
    pet = engine.get_pet()
    weekly = state.weekly
    slots = []
    if weekly is not None:
        for slot in weekly.slots:
            slots.append({
                **slot.model_dump(),
                "final_price": 0 if shop.is_free(weekly, slot, pet) else shop.slot_price(slot),
                "free": shop.is_free(weekly, slot, pet),
            })
    sale = state.flash_sale
    return {
        "week_id": weekly.week_id if weekly else None,
        "resets_at": weekly.resets_at if weekly else None,
        "free_item_id": weekly.free_item_id if weekly else None,
        "slots": slots,
        "flash_sale": {
            **sale.model_dump(),
            "final_price": shop.final_price(sale.item.price, sale.discount),
        } if sale else None,
    }


@router.post("/shop/purchase")
async def purchase_slot(body: ItemBody, engine: BuddyEngine = Depends(get_engine)):
    """Buy one slot of the weekly shop."""
    return checked(engine.purchase_shop_slot(body.item_id))


@router.post("/shop/flash-sale/purchase")
async def purchase_flash_sale(engine: BuddyEngine = Depends(get_engine)):
    """Buy the running flash sale item."""
    return checked(engine.purchase_flash_sale())
