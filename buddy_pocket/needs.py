"""Needs decay, care actions and derived mood.

Decay is linear in elapsed time and clamps at zero, so advancing by T in
one call matches advancing by T/2 twice up to float rounding (the clamp
is absorbing: once a need hits 0 every later step keeps it there).
Nothing here owns a timer; the caller decides when to advance.
"""

from __future__ import annotations

from typing import Literal

from buddy_pocket.models import CareAction, NeedName, Needs

BASE_DECAY_PER_MINUTE = 0.002

# Relative to the base (hunger) rate.
DECAY_MULTIPLIERS: dict[NeedName, float] = {
    "hunger": 1.0,
    "happiness": 0.8,
    "energy": 0.6,
    "hygiene": 0.5,
}

CRITICAL_THRESHOLD = 0.2

NEED_PRIORITY: tuple[NeedName, ...] = ("hunger", "happiness", "energy", "hygiene")

# action → (need restored, amount)
CARE_EFFECTS: dict[CareAction, tuple[NeedName, float]] = {
    "feed": ("hunger", 0.30),
    "pet": ("happiness", 0.25),
    "sleep": ("energy", 0.35),
    "bathe": ("hygiene", 0.30),
}
CARE_XP = 5
CARE_COINS = 2

MoodLevel = Literal["ecstatic", "happy", "neutral", "sad", "miserable"]

MOOD_EMOJI: dict[MoodLevel, str] = {
    "ecstatic": "😊",
    "happy": "🙂",
    "neutral": "😐",
    "sad": "😟",
    "miserable": "😢",
}


def advance_needs(
    needs: Needs,
    elapsed_minutes: float,
    base_rate: float = BASE_DECAY_PER_MINUTE,
) -> Needs:
    """Return a new Needs decayed by `elapsed_minutes`. Input is not mutated."""
    elapsed = max(0.0, elapsed_minutes)
    values = {}
    for name in NEED_PRIORITY:
        current = getattr(needs, name)
        values[name] = max(0.0, current - elapsed * base_rate * DECAY_MULTIPLIERS[name])
    return Needs(**values)


def apply_care(needs: Needs, action: CareAction) -> Needs:
    name, amount = CARE_EFFECTS[action]
    return needs.model_copy(update={name: min(1.0, getattr(needs, name) + amount)})


def critical_stat(needs: Needs) -> NeedName | None:
    """First need below the critical threshold in priority order, or None."""
    for name in NEED_PRIORITY:
        if getattr(needs, name) < CRITICAL_THRESHOLD:
            return name
    return None


def mood_level(needs: Needs) -> MoodLevel:
    avg = needs.average()
    if avg > 0.8:
        return "ecstatic"
    if avg > 0.6:
        return "happy"
    if avg > 0.4:
        return "neutral"
    if avg > 0.2:
        return "sad"
    return "miserable"


def mood_emoji(needs: Needs) -> str:
    return MOOD_EMOJI[mood_level(needs)]


def track_critical(
    needs: Needs, signaled: list[NeedName]
) -> tuple[list[NeedName], list[NeedName]]:
    """Compare needs against the already-signaled set.

    Returns (new_crossings, updated_signaled). A need appears in
    new_crossings only on the step it first drops below the threshold;
    it leaves the signaled set once it is back at or above it.
    """
    crossings: list[NeedName] = []
    updated: list[NeedName] = []
    for name in NEED_PRIORITY:
        below = getattr(needs, name) < CRITICAL_THRESHOLD
        if below:
            updated.append(name)
            if name not in signaled:
                crossings.append(name)
    return crossings, updated
