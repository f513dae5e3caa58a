"""Mini-game and battle reward endpoints."""

from fastapi import APIRouter, Depends

from buddy_pocket.engine import BuddyEngine

from .deps import checked, get_engine
from .models import BattleFinishedBody, BattlePlayBody, GameFinishedBody

router = APIRouter()


@router.post("/games/finish")
async def finish_game(body: GameFinishedBody, engine: BuddyEngine = Depends(get_engine)):
    """Report a finished mini-game; rewards are capped per day."""
    return checked(engine.finish_game(body.game, body.score))


@router.post("/battles/finish")
async def finish_battle(body: BattleFinishedBody, engine: BuddyEngine = Depends(get_engine)):
    """Report the outcome of a battle resolved elsewhere."""
    return checked(engine.finish_battle(body.won))


@router.post("/battles/play")
async def play_battle(body: BattlePlayBody, engine: BuddyEngine = Depends(get_engine)):
    """Simulate a three-round battle against an opponent and apply rewards."""
    battle, result = engine.play_battle(body.opponent_id)
    return {"battle": battle, "result": checked(result)}
