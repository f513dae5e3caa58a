"""One-shot battle simulation.

A battle is three rounds; each round draws a type and two values in
[10, 100] from the caller's RNG. The higher value takes the round, equal
values take nothing. More rounds won wins the battle; equal scores are a
draw, which counts as a loss for rewards.
"""

from __future__ import annotations

import random
import uuid
from typing import Literal

from pydantic import BaseModel, Field

RoundType = Literal["strength", "luck", "speed"]

ROUND_TYPES: tuple[RoundType, ...] = ("strength", "luck", "speed")
ROUND_COUNT = 3
VALUE_RANGE = (10, 100)


class BattleRound(BaseModel):
    number: int
    type: RoundType
    player_value: int
    opponent_value: int


class Battle(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    player_id: str
    opponent_id: str
    player_score: int = 0
    opponent_score: int = 0
    rounds: list[BattleRound] = Field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.player_score > self.opponent_score

    @property
    def winner_id(self) -> str | None:
        if self.player_score > self.opponent_score:
            return self.player_id
        if self.opponent_score > self.player_score:
            return self.opponent_id
        return None


def simulate_battle(player_id: str, opponent_id: str, rng: random.Random) -> Battle:
    battle = Battle(player_id=player_id, opponent_id=opponent_id)
    for number in range(1, ROUND_COUNT + 1):
        round_type = rng.choice(ROUND_TYPES)
        mine = rng.randint(*VALUE_RANGE)
        theirs = rng.randint(*VALUE_RANGE)
        battle.rounds.append(BattleRound(
            number=number, type=round_type, player_value=mine, opponent_value=theirs,
        ))
        if mine > theirs:
            battle.player_score += 1
        elif theirs > mine:
            battle.opponent_score += 1
    return battle
