"""Economy error taxonomy.

Leaf modules (wardrobe, shop, battle_pass) raise these. BuddyEngine catches
EconomyError at its action boundary and turns it into an ActionResult with
ok=False and error=<code>, so no expected rejection ever escapes the engine.

    InsufficientFunds      - gem balance below the price
    ItemNotUnlocked        - equip/place of a gated item (alias ItemLocked)
    AlreadyOwned           - purchase of something already in the unlock set
    UnknownItem            - id not in the catalog (or wrong category)
    InvalidStateTransition - action not valid in the current state
    RewardLocked           - battle-pass reward above level or premium-gated
    RewardAlreadyClaimed   - battle-pass reward claimed before
"""

from __future__ import annotations


class EconomyError(RuntimeError):
    """Base class for recoverable engine rejections."""

    code = "economy_error"


class InsufficientFunds(EconomyError):
    code = "insufficient_funds"

    def __init__(self, price: int, balance: int) -> None:
        super().__init__(f"Need {price} gems, have {balance}")
        self.price = price
        self.balance = balance


class ItemNotUnlocked(EconomyError):
    code = "item_not_unlocked"


ItemLocked = ItemNotUnlocked


class AlreadyOwned(EconomyError):
    code = "already_owned"


class UnknownItem(EconomyError):
    code = "unknown_item"


class InvalidStateTransition(EconomyError):
    code = "invalid_state_transition"


class RewardLocked(InvalidStateTransition):
    code = "reward_locked"


class RewardAlreadyClaimed(InvalidStateTransition):
    code = "reward_already_claimed"
