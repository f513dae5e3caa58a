import random

from buddy_pocket.battles import ROUND_COUNT, ROUND_TYPES, VALUE_RANGE, simulate_battle


def test_battle_has_three_rounds_in_range():
    battle = simulate_battle("me", "them", random.Random(5))
    assert len(battle.rounds) == ROUND_COUNT
    for rnd in battle.rounds:
        assert rnd.type in ROUND_TYPES
        assert VALUE_RANGE[0] <= rnd.player_value <= VALUE_RANGE[1]
        assert VALUE_RANGE[0] <= rnd.opponent_value <= VALUE_RANGE[1]


def test_scores_match_rounds():
    for seed in range(20):
        battle = simulate_battle("me", "them", random.Random(seed))
        mine = sum(r.player_value > r.opponent_value for r in battle.rounds)
        theirs = sum(r.opponent_value > r.player_value for r in battle.rounds)
        assert (battle.player_score, battle.opponent_score) == (mine, theirs)
        assert battle.won == (mine > theirs)
        if mine == theirs:
            assert battle.winner_id is None
        else:
            assert battle.winner_id == ("me" if mine > theirs else "them")


def test_seeded_rng_is_reproducible():
    a = simulate_battle("me", "them", random.Random(42))
    b = simulate_battle("me", "them", random.Random(42))
    assert a.rounds == b.rounds
    assert a.id != b.id
