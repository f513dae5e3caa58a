"""Shared route helpers: engine lookup and ActionResult → HTTP mapping."""

from fastapi import HTTPException, Request

from buddy_pocket.engine import BuddyEngine
from buddy_pocket.models import ActionResult
from buddy_pocket.sync import ProfileSync

_STATUS_BY_ERROR = {
    "insufficient_funds": 402,
    "item_not_unlocked": 403,
    "reward_locked": 403,
    "unknown_item": 404,
}


def get_engine(request: Request) -> BuddyEngine:
    return request.app.state.engine


def get_profile_sync(request: Request) -> ProfileSync:
    return request.app.state.profile_sync


def checked(result: ActionResult) -> ActionResult:
    """Return the result, or raise the HTTP error matching its code."""
    if result.ok:
        return result
    status = _STATUS_BY_ERROR.get(result.error or "", 409)
    raise HTTPException(status, detail={"error": result.error, "message": result.message})
