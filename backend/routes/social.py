"""Social hooks and profile sync."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from buddy_pocket.engine import BuddyEngine
from buddy_pocket.sync import ProfileSync, SyncError

from .deps import checked, get_engine, get_profile_sync
from .models import SocialStatusBody

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/social/message")
async def message_sent(engine: BuddyEngine = Depends(get_engine)):
    """Count a sent chat message toward the social mission."""
    return checked(engine.record_message_sent())


@router.post("/social/status")
async def social_status(body: SocialStatusBody, engine: BuddyEngine = Depends(get_engine)):
    """Report friend count and clan membership from the social backend."""
    return checked(engine.record_social(body.friends, body.in_clan))


@router.post("/social/clan", status_code=201)
async def create_clan(engine: BuddyEngine = Depends(get_engine)):
    """Pay for a new clan."""
    return checked(engine.create_clan())


@router.post("/profile/sync")
async def sync_profile(
    engine: BuddyEngine = Depends(get_engine),
    profile_sync: ProfileSync = Depends(get_profile_sync),
):
    """Push the public profile to the social backend."""
    snapshot = engine.profile_snapshot()
    try:
        await profile_sync.push(snapshot)
    except SyncError as e:
        logger.warning("profile sync failed: %s", e)
        raise HTTPException(502, str(e))
    return snapshot
