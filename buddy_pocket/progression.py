"""Pet XP, levels, secret-body unlocks and achievements."""

from __future__ import annotations

import logging
from typing import Callable

from buddy_pocket.catalog import Catalog
from buddy_pocket.models import Achievement, PetState

logger = logging.getLogger(__name__)

MAX_LEVEL = 50

MINI_GAMES: tuple[str, ...] = (
    "memory", "quiz", "reaction", "simon", "race",
    "fishing", "cooking", "typing", "drawing_guess", "pictionary",
)


def xp_required_for_level(level: int) -> int:
    return level * 100 + 50


def add_xp(pet: PetState, amount: int) -> int:
    """Add XP with level-up carry. Returns the number of levels gained.

    At MAX_LEVEL any remaining XP is discarded so `xp` stays below the
    requirement for the current level.
    """
    if amount <= 0:
        return 0
    start = pet.level
    pet.xp += amount
    while pet.level < MAX_LEVEL and pet.xp >= xp_required_for_level(pet.level):
        pet.xp -= xp_required_for_level(pet.level)
        pet.level += 1
    if pet.level >= MAX_LEVEL:
        pet.level = MAX_LEVEL
        pet.xp = 0
    return pet.level - start


def unlock_secret_bodies(pet: PetState, catalog: Catalog) -> list[str]:
    """Add every secret body whose level requirement is met. Returns new ids."""
    added = []
    for body in catalog.secret_bodies():
        if pet.level >= body.unlock_level and body.id not in pet.unlocked.bodies:
            pet.unlocked.bodies.append(body.id)
            added.append(body.id)
    if added:
        logger.debug("secret bodies unlocked level=%d ids=%s", pet.level, added)
    return added


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------

def default_achievements() -> list[Achievement]:
    return [
        Achievement(id="ach_first_feed", name="Premier repas",
                    description="Nourris ton Buddy pour la première fois", emoji="🍽️", reward_gems=5),
        Achievement(id="ach_level5", name="Débutant",
                    description="Atteins le niveau 5", emoji="⭐", reward_gems=10),
        Achievement(id="ach_level10", name="Intermédiaire",
                    description="Atteins le niveau 10", emoji="🌟", reward_gems=15),
        Achievement(id="ach_level25", name="Expert",
                    description="Atteins le niveau 25", emoji="💫", reward_gems=20),
        Achievement(id="ach_level50", name="Légende",
                    description="Atteins le niveau 50", emoji="🏆", reward_gems=50),
        Achievement(id="ach_streak7", name="Une semaine !",
                    description="7 jours de streak", emoji="🔥", reward_gems=10),
        Achievement(id="ach_streak30", name="Un mois !",
                    description="30 jours de streak", emoji="🔥", reward_gems=30),
        Achievement(id="ach_10friends", name="Populaire",
                    description="Ajoute 10 amis", emoji="👥", reward_gems=15),
        Achievement(id="ach_first_battle", name="Guerrier",
                    description="Gagne ton premier battle", emoji="⚔️", reward_gems=5),
        Achievement(id="ach_10battles", name="Champion",
                    description="Gagne 10 battles", emoji="🏅", reward_gems=20),
        Achievement(id="ach_clan", name="Membre de clan",
                    description="Rejoins un clan", emoji="🏰", reward_gems=10),
        Achievement(id="ach_allgames", name="Joueur complet",
                    description="Joue à tous les mini-jeux", emoji="🎮", reward_gems=15),
        Achievement(id="ach_100costumes", name="Fashionista",
                    description="Débloques 100 items", emoji="👗", reward_gems=20),
    ]


ACHIEVEMENT_RULES: dict[str, Callable[[PetState], bool]] = {
    "ach_first_feed": lambda p: p.stats.feeds >= 1,
    "ach_level5": lambda p: p.level >= 5,
    "ach_level10": lambda p: p.level >= 10,
    "ach_level25": lambda p: p.level >= 25,
    "ach_level50": lambda p: p.level >= 50,
    "ach_streak7": lambda p: p.streak_days >= 7,
    "ach_streak30": lambda p: p.streak_days >= 30,
    "ach_10friends": lambda p: p.stats.friends >= 10,
    "ach_first_battle": lambda p: p.stats.battles_won >= 1,
    "ach_10battles": lambda p: p.stats.battles_won >= 10,
    "ach_clan": lambda p: p.stats.clans_joined >= 1,
    "ach_allgames": lambda p: set(MINI_GAMES) <= set(p.stats.games_played),
    "ach_100costumes": lambda p: p.unlocked.total() >= 100,
}


def evaluate_achievements(pet: PetState, achievements: list[Achievement]) -> list[Achievement]:
    """Unlock and reward every achievement whose predicate now holds.

    Already-unlocked entries are skipped, so repeated calls never pay twice.
    Returns the achievements unlocked by this call.
    """
    newly: list[Achievement] = []
    for ach in achievements:
        if ach.unlocked:
            continue
        rule = ACHIEVEMENT_RULES.get(ach.id)
        if rule is None or not rule(pet):
            continue
        ach.unlocked = True
        pet.gems += ach.reward_gems
        newly.append(ach)
        logger.debug("achievement unlocked id=%s gems=%d", ach.id, ach.reward_gems)
    return newly
