"""Health check, settings, seasonal events and widget projection."""

from fastapi import APIRouter, Depends

from buddy_pocket.engine import BuddyEngine

from .deps import get_engine

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings(engine: BuddyEngine = Depends(get_engine)):
    """Effective engine settings (secrets excluded)."""
    return engine.settings.model_dump(exclude={"dev_code", "sync_api_key"})


@router.get("/events/seasonal")
async def seasonal_events(engine: BuddyEngine = Depends(get_engine)):
    """Seasonal events running today."""
    return engine.active_events()


@router.get("/widget")
async def widget(engine: BuddyEngine = Depends(get_engine)):
    """Reduced read-only projection written for the home-screen widget."""
    return engine.widget_snapshot()
