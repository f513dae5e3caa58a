"""Tests for the daily mission board."""

from datetime import date

import pytest

from buddy_pocket.errors import UnknownItem
from buddy_pocket.missions import (
    FEED_MISSION,
    GAME_MISSION,
    META_MISSION,
    SOCIAL_MISSION,
    increment_progress,
    roll_over,
)
from buddy_pocket.models import PetState

TODAY = date(2026, 3, 4)


@pytest.fixture
def board():
    return roll_over(None, TODAY)


def _mission(board, mission_id):
    return next(m for m in board.missions if m.id == mission_id)


def test_fresh_board(board):
    assert [m.id for m in board.missions] == [FEED_MISSION, GAME_MISSION, SOCIAL_MISSION, META_MISSION]
    assert all(m.progress == 0 for m in board.missions)


def test_roll_over_same_day_keeps_progress(board):
    _mission(board, FEED_MISSION).progress = 2
    assert roll_over(board, TODAY) is board


def test_roll_over_new_day_resets(board):
    _mission(board, FEED_MISSION).progress = 2
    fresh = roll_over(board, date(2026, 3, 5))
    assert fresh.day == date(2026, 3, 5)
    assert _mission(fresh, FEED_MISSION).progress == 0


def test_reward_paid_on_completion_only(board):
    pet = PetState()
    assert increment_progress(board, FEED_MISSION, pet) == []
    assert increment_progress(board, FEED_MISSION, pet) == []
    rewarded = increment_progress(board, FEED_MISSION, pet)
    assert [m.id for m in rewarded] == [FEED_MISSION]
    assert (pet.gems, pet.coins) == (11, 110)


def test_reward_paid_once(board):
    pet = PetState()
    increment_progress(board, SOCIAL_MISSION, pet)
    assert increment_progress(board, SOCIAL_MISSION, pet) == []
    assert _mission(board, SOCIAL_MISSION).progress == 2
    assert pet.gems == 11


def test_meta_mission_completes_with_the_rest(board):
    pet = PetState()
    for _ in range(3):
        increment_progress(board, FEED_MISSION, pet)
    increment_progress(board, GAME_MISSION, pet)
    increment_progress(board, GAME_MISSION, pet)
    rewarded = increment_progress(board, SOCIAL_MISSION, pet)
    assert [m.id for m in rewarded] == [SOCIAL_MISSION, META_MISSION]
    assert _mission(board, META_MISSION).completed
    assert pet.gems == 10 + 1 + 1 + 1 + 2
    assert pet.coins == 100 + 10 + 15 + 5 + 25


@pytest.mark.parametrize("mission_id", [META_MISSION, "daily_dance"])
def test_cannot_increment(board, mission_id):
    with pytest.raises(UnknownItem):
        increment_progress(board, mission_id, PetState())
