"""FastAPI API endpoints under /api.

Endpoint groups: health/settings/widget, pet (care, decay, appearance),
play (mini-games, battles), catalog, shop (weekly slate, flash sale),
wardrobe (equip, decor), progress (battle pass, missions, achievements),
social (messages, clans, profile sync), purchases (store grants, debug).

Every action endpoint returns the engine's ActionResult; rejected actions
become HTTP errors (402 insufficient funds, 403 locked, 404 unknown,
409 otherwise) with {"error": code, "message": text} as detail.
"""

from fastapi import APIRouter

from .catalog import router as catalog_router
from .pet import router as pet_router
from .play import router as play_router
from .progress import router as progress_router
from .purchases import router as purchases_router
from .settings import router as settings_router
from .shop import router as shop_router
from .social import router as social_router
from .wardrobe import router as wardrobe_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(pet_router)
router.include_router(play_router)
router.include_router(catalog_router)
router.include_router(shop_router)
router.include_router(wardrobe_router)
router.include_router(progress_router)
router.include_router(social_router)
router.include_router(purchases_router)
