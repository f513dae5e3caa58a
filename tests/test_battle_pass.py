"""Tests for the seasonal battle pass."""

from datetime import datetime

import pytest

from buddy_pocket import battle_pass
from buddy_pocket.battle_pass import (
    ITEM_REWARD_GEMS,
    MAX_LEVEL,
    add_xp,
    claim_reward,
    days_remaining,
    ensure_current_season,
    is_active,
    new_season,
    season_rewards,
    xp_required_for_level,
)
from buddy_pocket.errors import RewardAlreadyClaimed, RewardLocked, UnknownItem
from buddy_pocket.models import PetState

START = datetime(2026, 3, 4, 9, 0)


@pytest.fixture
def bp():
    return new_season(1, START)


class TestXp:
    def test_requirement(self):
        assert xp_required_for_level(0) == 200
        assert xp_required_for_level(10) == 700

    def test_carry(self, bp):
        assert add_xp(bp, 260) == 1
        assert (bp.level, bp.xp) == (1, 60)

    def test_cap_drops_overflow(self, bp):
        add_xp(bp, 10_000_000)
        assert bp.level == MAX_LEVEL
        assert bp.xp == 0
        assert add_xp(bp, 500) == 0


class TestRewards:
    def test_table_shape(self):
        rewards = season_rewards(1)
        assert [r.level for r in rewards] == list(range(1, MAX_LEVEL + 1))
        assert len({r.id for r in rewards}) == MAX_LEVEL
        assert rewards[0].kind == "gems" and rewards[0].value == 2
        assert rewards[1].kind == "coins" and rewards[1].value == 40
        assert rewards[4].kind == "costume"
        assert [r.level for r in rewards if r.premium_only] == list(range(3, MAX_LEVEL + 1, 3))

    def test_claim_gems(self, bp):
        bp.level = 1
        pet = PetState()
        reward = claim_reward(bp, 1, pet)
        assert reward.claimed
        assert pet.gems == 12

    def test_claim_coins(self, bp):
        bp.level = 2
        pet = PetState()
        claim_reward(bp, 2, pet)
        assert pet.coins == 140

    def test_item_rewards_pay_flat_gems(self, bp):
        bp.level = 4
        pet = PetState()
        claim_reward(bp, 4, pet)
        assert pet.gems == 10 + ITEM_REWARD_GEMS

    def test_above_level_is_locked(self, bp):
        pet = PetState()
        with pytest.raises(RewardLocked):
            claim_reward(bp, 1, pet)
        assert pet.gems == 10
        assert not bp.rewards[0].claimed

    def test_premium_reward_needs_premium(self, bp):
        bp.level = 5
        with pytest.raises(RewardLocked):
            claim_reward(bp, 3, PetState())
        bp.premium = True
        assert claim_reward(bp, 3, PetState()).claimed

    def test_double_claim(self, bp):
        bp.level = 1
        pet = PetState()
        claim_reward(bp, 1, pet)
        with pytest.raises(RewardAlreadyClaimed):
            claim_reward(bp, 1, pet)
        assert pet.gems == 12

    def test_unknown_level(self, bp):
        bp.level = MAX_LEVEL
        with pytest.raises(UnknownItem):
            claim_reward(bp, MAX_LEVEL + 1, PetState())


class TestSeasons:
    def test_new_season_lasts_two_months(self, bp):
        assert bp.season_id == "season_1"
        assert bp.ends_at == datetime(2026, 5, 4, 9, 0)
        assert is_active(bp, START)
        assert days_remaining(bp, START) == 61

    def test_month_end_is_clamped(self):
        assert new_season(1, datetime(2026, 12, 31)).ends_at == datetime(2027, 2, 28)

    def test_first_season_when_missing(self):
        bp, rolled = ensure_current_season(None, START)
        assert rolled
        assert bp.season_id == "season_1"

    def test_running_season_kept(self, bp):
        same, rolled = ensure_current_season(bp, datetime(2026, 5, 1))
        assert same is bp
        assert not rolled

    def test_rollover_resets_progress(self, bp):
        bp.level, bp.xp, bp.premium = 12, 80, True
        nxt, rolled = ensure_current_season(bp, datetime(2026, 5, 5))
        assert rolled
        assert nxt.season_id == "season_2"
        assert nxt.starts_at == bp.ends_at
        assert (nxt.level, nxt.xp, nxt.premium) == (0, 0, False)
        assert not any(r.claimed for r in nxt.rewards)

    def test_rollover_skips_elapsed_seasons(self, bp):
        nxt, _ = ensure_current_season(bp, datetime(2027, 3, 5))
        assert battle_pass.season_number(nxt) == 7
        assert nxt.starts_at == datetime(2027, 3, 4, 9, 0)
