"""Battle pass, daily missions, achievements and high scores."""

from fastapi import APIRouter, Depends

from buddy_pocket import battle_pass
from buddy_pocket.engine import BuddyEngine

from .deps import checked, get_engine
from .models import ClaimBody

router = APIRouter()


@router.get("/battle-pass")
async def get_battle_pass(engine: BuddyEngine = Depends(get_engine)):
    """Current season with XP needed for the next level."""
    bp = engine.get_battle_pass()
    return {
        **bp.model_dump(),
        "xp_required": battle_pass.xp_required_for_level(bp.level),
        "max_level": battle_pass.MAX_LEVEL,
    }


@router.post("/battle-pass/claim")
async def claim(body: ClaimBody, engine: BuddyEngine = Depends(get_engine)):
    """Claim the reward at a pass level (once)."""
    return checked(engine.claim_battle_pass_reward(body.level))


@router.post("/battle-pass/premium")
async def upgrade(engine: BuddyEngine = Depends(get_engine)):
    """Unlock the premium track for the current season."""
    return checked(engine.upgrade_battle_pass())


@router.get("/missions")
async def get_missions(engine: BuddyEngine = Depends(get_engine)):
    """Today's mission board."""
    board = engine.get_missions()
    return {
        "day": board.day,
        "missions": [{**m.model_dump(), "completed": m.completed} for m in board.missions],
    }


@router.get("/achievements")
async def get_achievements(engine: BuddyEngine = Depends(get_engine)):
    return engine.get_achievements()


@router.get("/high-scores")
async def get_high_scores(engine: BuddyEngine = Depends(get_engine)):
    return engine.get_high_scores()
